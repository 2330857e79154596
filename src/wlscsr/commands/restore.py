"""Restore command."""

import logging
from typing import List, Sequence

from ..config import Config
from ..exceptions import ReconciliationError, SnapshotCorruptError
from ..fallback import FallbackPlacement, fallback_layout
from ..models import DisplayHandle
from ..providers import DisplayProvider
from ..reconcile import Reconciler
from ..session import DisplaySession


def restore_config(
    config: Config,
    provider: DisplayProvider,
    fallback_to_default: bool = False,
    dry_run: bool = False,
) -> bool:
    """
    Restore the saved configuration for the connected displays.

    Args:
        config: Config instance
        provider: Display backend
        fallback_to_default: Apply the generic layout when no saved
            configuration matches instead of failing
        dry_run: Print what would be applied without applying it

    Returns:
        True if the saved configuration was used, False if the fallback was

    Raises:
        ReconciliationError: If no saved configuration matches and
            fallback_to_default is False
        ProviderError: If applying fails
    """
    logger = logging.getLogger(__name__)
    session = DisplaySession.open(config, provider)
    reconciler = Reconciler(session.store)

    try:
        plan = reconciler.reconcile(session.active, session.ignored)
    except ReconciliationError as e:
        if not fallback_to_default:
            raise
        if isinstance(e.cause, SnapshotCorruptError):
            logger.warning(f"Ignoring corrupt snapshot {e.cause.path}")
        logger.error(str(e))

        layout = fallback_layout(session.active_names, session.ignored_names)
        if dry_run:
            _print_layout(layout)
        else:
            logger.info("Applying default configuration")
            provider.apply_fallback(session.active_names, session.ignored_names)
        return False

    if dry_run:
        _print_plan(plan)
    else:
        provider.apply(plan)
        logger.info(f"Restored configuration from {session.snapshot_path}")
    return True


def _print_plan(plan: Sequence[DisplayHandle]) -> None:
    print("Would apply saved configuration:")
    for display in plan:
        cfg = display.config
        if cfg is None:
            print(f"  {display.name}: off")
        else:
            print(
                f"  {display.name}: {cfg.width}x{cfg.height}@{cfg.refresh_rate} "
                f"at {cfg.x},{cfg.y} scale {cfg.scale} "
                f"transform {cfg.transform_name} vrr {'on' if cfg.vrr else 'off'}"
            )


def _print_layout(layout: List[FallbackPlacement]) -> None:
    print("Would apply default configuration:")
    for placement in layout:
        if not placement.enabled:
            print(f"  {placement.name}: off")
        elif placement.right_of is None:
            print(f"  {placement.name}: preferred mode at 0,0")
        else:
            print(f"  {placement.name}: preferred mode right of {placement.right_of}")
