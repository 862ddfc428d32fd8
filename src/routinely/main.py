"""Entry point for routinely."""

import logging
import sys

HELP = """\
routinely -- habit tracker for weekly and every-N-days routines

commands:
  routinely routine add      Add a routine (--weekly mon,wed or --every N)
  routinely routine list     Show all routines with their status
  routinely routine show     Show progress and history for a routine
  routinely routine done     Mark a routine completed for today
  routinely routine edit     Change a routine's name, schedule or color
  routinely routine delete   Delete a routine by ID
  routinely help             Show this help message

examples:
  routinely routine add -n "Stretch" --weekly mon,wed,fri
  routinely routine add -n "Water plants" --every 3
  routinely routine done 1a2b3c4d --duration 600
"""


def _dispatch_subcommand() -> bool:
    """Route CLI subcommands. Returns True if handled."""
    if len(sys.argv) < 2:
        return False
    cmd = sys.argv[1]
    rest = sys.argv[2:]
    if cmd in ("help", "--help", "-h"):
        print(HELP)
        return True
    routes: dict[str, tuple[str, str]] = {
        "routine": ("routinely.tracking.routine_cmd", "run_routine_command"),
    }
    if cmd in routes:
        from importlib import import_module

        mod_path, func_name = routes[cmd]
        getattr(import_module(mod_path), func_name)(rest)
        return True
    return False


def main() -> None:
    from routinely.config import LOG_LEVEL

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if _dispatch_subcommand():
        return
    print(HELP)
    raise SystemExit(1)


if __name__ == "__main__":
    main()
