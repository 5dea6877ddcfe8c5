"""Per-request authorization decision."""

from dataclasses import dataclass
from datetime import datetime

from storefront.core.modules.session.models import Session


@dataclass(frozen=True)
class Allow:
    session: Session


@dataclass(frozen=True)
class Deny:
    redirect_to: str


def authorize(session: Session | None, at: datetime, login_url: str) -> Allow | Deny:
    """Allow only a live session with a principal; send everyone else to login.

    Pure: never touches the credential or session store.
    """
    if session is None or not session.user_name or session.is_expired(at):
        return Deny(redirect_to=login_url)
    return Allow(session=session)
