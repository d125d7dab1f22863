"""Service Factory for NetWatch.

This module provides factory functions for creating service instances backed
by the SQLAlchemy repositories. Use these functions in production code to
ensure every service receives the repositories it needs.

For testing, inject protocol-based fakes instead of using these factories.

Example:
    # Production usage
    from netwatch.factory import create_hack_service
    hacks = create_hack_service(session)

    # Testing usage
    from netwatch.services.hack_service import HackService

    class FixedOutcome:
        def decide(self, operation, target, defenses):
            return HackOutcome(True, 1, 50, 0.5, "always wins")

    hacks = HackService(operations, computers, defenses, players, policy=FixedOutcome())
"""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from netwatch.config import Settings, get_settings
from netwatch.database import get_session_factory
from netwatch.interfaces import IHackOutcomePolicy
from netwatch.repository import (
    SqlComputerRepository,
    SqlDefenseRepository,
    SqlHackOperationRepository,
    SqlPlayerRepository,
    SqlProgressionUnlockRepository,
    SqlUserRepository,
)
from netwatch.services.computer_service import ComputerService
from netwatch.services.hack_service import HackService
from netwatch.services.identity_service import IdentityService
from netwatch.services.monitor import HackMonitor
from netwatch.services.player_service import PlayerService
from netwatch.services.progression_service import ProgressionService


def create_identity_service(session: Session) -> IdentityService:
    """Create an IdentityService bound to ``session``."""
    return IdentityService(SqlUserRepository(session))


def create_player_service(session: Session) -> PlayerService:
    """Create a PlayerService bound to ``session``."""
    return PlayerService(SqlPlayerRepository(session), SqlUserRepository(session))


def create_computer_service(
    session: Session, settings: Settings | None = None
) -> ComputerService:
    """Create a ComputerService bound to ``session``.

    Args:
        session: Database session
        settings: Runtime settings (defaults to ``get_settings()``)

    Returns:
        Fully initialized ComputerService
    """
    return ComputerService(
        SqlComputerRepository(session),
        SqlDefenseRepository(session),
        SqlPlayerRepository(session),
        settings=settings or get_settings(),
    )


def create_hack_service(
    session: Session,
    settings: Settings | None = None,
    policy: IHackOutcomePolicy | None = None,
) -> HackService:
    """Create a HackService bound to ``session``.

    Args:
        session: Database session
        settings: Runtime settings (defaults to ``get_settings()``)
        policy: Outcome policy (defaults to ``DefenseWeightedOutcome``)

    Returns:
        Fully initialized HackService
    """
    return HackService(
        SqlHackOperationRepository(session),
        SqlComputerRepository(session),
        SqlDefenseRepository(session),
        SqlPlayerRepository(session),
        policy=policy,
        settings=settings or get_settings(),
    )


def create_progression_service(session: Session) -> ProgressionService:
    """Create a ProgressionService bound to ``session``."""
    return ProgressionService(SqlProgressionUnlockRepository(session), SqlPlayerRepository(session))


def create_all_services(session: Session, settings: Settings | None = None) -> dict:
    """Create all services on one session.

    Returns:
        Dictionary containing all initialized services:
        - identity: IdentityService
        - players: PlayerService
        - computers: ComputerService
        - hacks: HackService
        - progression: ProgressionService
    """
    settings = settings or get_settings()
    return {
        "identity": create_identity_service(session),
        "players": create_player_service(session),
        "computers": create_computer_service(session, settings),
        "hacks": create_hack_service(session, settings),
        "progression": create_progression_service(session),
    }


def resolve_due_hacks_once(
    session_factory: sessionmaker[Session] | None = None,
    settings: Settings | None = None,
) -> int:
    """Open a session, resolve every due hack and return how many were resolved."""
    session_factory = session_factory or get_session_factory()
    with session_factory() as session:
        return len(create_hack_service(session, settings).resolve_due_hacks())


def create_hack_monitor(
    session_factory: sessionmaker[Session] | None = None,
    settings: Settings | None = None,
) -> HackMonitor:
    """Create a HackMonitor whose passes each use a fresh session.

    Args:
        session_factory: Session factory (defaults to the global one)
        settings: Runtime settings (defaults to ``get_settings()``)

    Returns:
        HackMonitor polling every ``settings.hack_poll_interval_seconds``
    """
    settings = settings or get_settings()
    factory = session_factory or get_session_factory()
    return HackMonitor(
        lambda: resolve_due_hacks_once(factory, settings),
        interval_seconds=settings.hack_poll_interval_seconds,
    )
