"""Completion candidates: names of running containers."""

import asyncio
import logging

logger = logging.getLogger(__name__)

PS_ARGS = ("ps", "--noheading", "--format", "{{.Names}}")


def parse_names(output: str) -> list[str]:
    """Split runtime output into container names, one per line.

    Blank lines (including the trailing newline) are dropped; order is kept.
    """
    return [line.strip() for line in output.splitlines() if line.strip()]


async def list_candidates(runtime_path: str) -> list[str]:
    """List running container names via `<runtime> ps`.

    A missing runtime binary or a failing `ps` yields an empty list and a
    warning; completion never raises.

    Args:
        runtime_path: Container runtime executable (podman or docker)

    Returns:
        Container names in the order the runtime printed them.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            runtime_path,
            *PS_ARGS,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.warning("Cannot run container runtime %s: %s", runtime_path, e)
        return []

    stdout, stderr = await process.communicate()

    if process.returncode != 0:
        logger.warning(
            "%s ps failed (code %s): %s",
            runtime_path,
            process.returncode,
            stderr.decode("utf-8", errors="replace").strip(),
        )
        return []

    names = parse_names(stdout.decode("utf-8", errors="replace"))
    logger.debug("Found %d running container(s)", len(names))
    return names
