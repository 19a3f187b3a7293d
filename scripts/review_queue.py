"""Review job postings and applications from the terminal."""

from __future__ import annotations

import argparse
import asyncio

from jobboard.admin import AdminDashboard, AdminListStore, AdminRequestError
from jobboard.monitoring.logging import configure_logging
from jobboard.services.statuses import ALL_STATUSES, ModerationStatus, RecordStatus


async def _prompt(message: str) -> bool:
    answer = await asyncio.to_thread(input, f"{message} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _print_items(store: AdminListStore) -> None:
    for item in store.visible_items:
        label = getattr(item, "title", None) or getattr(item, "name", "")
        print(f"{item.id}  {item.status:<9}  {label}")
    counts = store.counts
    if counts is not None:
        print(
            f"total={counts.total} pending={counts.pending} "
            f"approved={counts.approved} rejected={counts.rejected}",
        )


async def run(args: argparse.Namespace) -> int:
    dashboard = AdminDashboard.from_settings(confirm=_prompt)
    store = dashboard.jobs if args.queue == "jobs" else dashboard.applications
    try:
        await store.fetch_items()
        if store.last_error is not None:
            print(f"Could not load {args.queue}: {store.last_error}")
            return 1

        if args.command == "list":
            await store.set_selected_status(args.status)
            _print_items(store)
        elif args.command == "delete":
            if await store.delete_item(args.item_id):
                print(f"Deleted {args.item_id}")
        else:
            status = ModerationStatus.APPROVED if args.command == "approve" else ModerationStatus.REJECTED
            await store.update_item_status(args.item_id, status.value)
            print(f"{args.item_id} {status.value}")
    except AdminRequestError as exc:
        print(f"Request failed: {exc}")
        return 1
    finally:
        await dashboard.close()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Moderate the job board review queues")
    parser.add_argument("queue", choices=["jobs", "applications"])
    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="Show items in the queue")
    list_parser.add_argument(
        "--status",
        default=ALL_STATUSES,
        choices=[ALL_STATUSES, *(status.value for status in RecordStatus)],
    )
    for name in ("approve", "reject", "delete"):
        command = commands.add_parser(name, help=f"{name.capitalize()} one item")
        command.add_argument("item_id")

    configure_logging()
    raise SystemExit(asyncio.run(run(parser.parse_args())))


if __name__ == "__main__":
    main()
