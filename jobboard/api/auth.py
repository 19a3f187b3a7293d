"""Authentication helpers and route dependencies."""

from fastapi import Depends, Header, HTTPException, status

from jobboard.config.settings import get_settings


def require_admin(
    x_admin_email: str | None = Header(default=None, alias="X-Admin-Email"),
) -> str:
    """
    Ensure the caller is on the admin e-mail allow-list and return their e-mail.

    Identity is asserted by the upstream auth proxy through the ``X-Admin-Email``
    header; this dependency only decides whether that identity may moderate.
    """

    settings = get_settings()
    if not settings.admin_emails:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin allow-list is not configured.",
        )

    if not x_admin_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    if not settings.is_admin(x_admin_email):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    return x_admin_email.strip().lower()


AdminDependency = Depends(require_admin)
