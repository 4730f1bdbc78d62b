"""Path utilities for resource access."""

from pathlib import Path
from typing import Optional, Union


def get_zoneinfo_path(zoneinfo_dir: Union[str, Path], tzid: str) -> Path:
    """Get the path of a timezone definition in a libical zoneinfo tree.

    libical stores one ``.ics`` file per zone, nested by region, e.g.
    ``zoneinfo/Europe/London.ics``.

    Args:
        zoneinfo_dir: Root of the zoneinfo tree.
        tzid: IANA timezone identifier.

    Returns:
        Path to the ``.ics`` file for the zone.
    """
    return Path(zoneinfo_dir).expanduser() / f"{tzid}.ics"


def resolve_output_path(outfile: Optional[Union[str, Path]]) -> Optional[Path]:
    """Normalize the output file option; None means standard output."""
    if outfile is None or str(outfile) in ("", "-"):
        return None
    return Path(outfile).expanduser()

