# server.py
"""
Run one of the services under uvicorn.

    python server.py patients            # identity + patient directory, port 3001
    python server.py clinical --port 4002
"""
import argparse
import sys
import uvicorn
from dotenv import load_dotenv

from common.config import ServiceKind, initialize_config
from common.api_error import ConfigurationError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Healthcare administration services")
    parser.add_argument("service", choices=[kind.value for kind in ServiceKind])
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    service = ServiceKind(args.service)

    load_dotenv()
    try:
        config = initialize_config()
    except ConfigurationError as e:
        # Can't use logger yet, but that's OK - this is a fatal startup error
        print(f"FATAL: Configuration error:\n{e}", file=sys.stderr)
        sys.exit(1)

    uvicorn.run(
        f"main:{service.value}_app",  # zero-arg factory, see main.py
        factory=True,
        host=args.host,
        port=args.port or service.default_port,
        reload=not config.environment.is_production,
        log_level=config.logging.level_value.lower(),
    )


if __name__ == "__main__":
    main()
