"""Assembly of matched entries and run metadata into a manifest."""

import logging
import socket
from datetime import datetime
from typing import Callable, Optional, Sequence

from .models import ManifestEntry, OutputManifest

logger = logging.getLogger(__name__)


def resolve_hostname() -> str:
    """Return this machine's hostname.

    Raises:
        OSError: If the lookup fails; assemble_manifest substitutes ""
    """
    return socket.gethostname()


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment as offset-aware ISO-8601 with second precision.

    Naive datetimes are taken as local time. The default is the current time.
    """
    moment = moment or datetime.now()
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.isoformat(timespec="seconds")


def assemble_manifest(
    entries: Sequence[ManifestEntry],
    hostname_resolver: Callable[[], str] = resolve_hostname,
    now: Optional[datetime] = None,
) -> OutputManifest:
    """Wrap matched entries with the hostname and generation time.

    Args:
        entries: Manifest entries in emission order
        hostname_resolver: Callable returning the hostname
        now: Generation time, defaults to the moment of assembly

    Returns:
        OutputManifest ready to be written
    """
    try:
        hostname = hostname_resolver()
    except OSError as e:
        logger.warning("Could not resolve hostname: %s", e)
        hostname = ""

    return OutputManifest(
        hostname=hostname or "",
        date=format_timestamp(now),
        images=list(entries),
    )
