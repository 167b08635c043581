import sys
import logging

from config import get_settings
from engine import PaymentsEngine
from errors import InputError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format=settings.log_format_string,
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()

    if len(argv) != 1:
        print("Usage: payments-ledger <input.csv>", file=sys.stderr)
        return 1

    filepath = argv[0]
    engine = PaymentsEngine()
    try:
        engine.process_file(filepath)
    except (OSError, InputError) as e:
        logger.error(f"Failed to read {filepath}: {e}")
        return 1

    engine.write_snapshot(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
