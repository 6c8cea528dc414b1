"""Navigation access control."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from bookshelf.core.auth.session import SessionManager


class NavigationAction(str, Enum):
    """What to do with a navigation attempt."""
    ALLOW = "allow"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class NavigationDecision:
    """Outcome of a guard check. ``location`` is set only for redirects."""
    action: NavigationAction
    location: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.action is NavigationAction.ALLOW


ALLOW = NavigationDecision(NavigationAction.ALLOW)


def is_public_path(target_path: str, public_paths: Iterable[str]) -> bool:
    """Public paths match by prefix, so ``/login/help`` is public too."""
    return any(target_path.startswith(path) for path in public_paths)


def evaluate_navigation(
    target_path: str,
    authenticated: bool,
    public_paths: Iterable[str] = ("/login",),
    login_path: str = "/login",
    home_path: str = "/",
) -> NavigationDecision:
    """Decide whether a navigation to ``target_path`` may proceed."""
    if not authenticated and not is_public_path(target_path, public_paths):
        return NavigationDecision(NavigationAction.REDIRECT, login_path)

    if authenticated and target_path == login_path:
        return NavigationDecision(NavigationAction.REDIRECT, home_path)

    return ALLOW


class RouteGuard:
    """Applies :func:`evaluate_navigation` to the current session."""

    def __init__(
        self,
        session: SessionManager,
        public_paths: Iterable[str] = ("/login",),
        login_path: str = "/login",
        home_path: str = "/",
    ) -> None:
        self._session = session
        self._public_paths = tuple(public_paths)
        self._login_path = login_path
        self._home_path = home_path

    def decide(self, target_path: str) -> NavigationDecision:
        return evaluate_navigation(
            target_path,
            self._session.is_authenticated,
            public_paths=self._public_paths,
            login_path=self._login_path,
            home_path=self._home_path,
        )
