import argparse
import logging
import os
import sys

from dispatcher import FactorizationDispatcher
from factorization import DEFAULT_BATCH_SIZE, FactorizationError

logger = logging.getLogger(__name__)


def process(dispatcher: FactorizationDispatcher, text: str) -> int:
    try:
        future = dispatcher.submit(text)
    except FactorizationError as e:
        print(f"{text.strip()}: {e}", file=sys.stderr)
        return 1
    try:
        print(future.result())
    except KeyboardInterrupt:
        dispatcher.cancel()
        try:
            future.result()
        except FactorizationError as e:
            print(f"{text.strip()}: {e}", file=sys.stderr)
        raise
    return 0


def main(argv=None):
    ap = argparse.ArgumentParser(description="Prime factors of integers in [2, 2**63 - 1) by trial division")
    ap.add_argument("--batch-size", type=int,
                    default=os.getenv("FACTOR_BATCH_SIZE", str(DEFAULT_BATCH_SIZE)),
                    help="primes fetched per generator call")
    ap.add_argument("--plain", action="store_true", help="write exponents as p^e instead of superscripts")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    ap.add_argument("N", nargs="*", help="integers to factor; read from stdin when omitted")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s:%(levelname)s:%(name)s:%(message)s')
    if args.batch_size < 1:
        ap.error("--batch-size must be positive")

    dispatcher = FactorizationDispatcher(batch_size=args.batch_size, superscript=not args.plain)
    inputs = args.N if args.N else (line for line in sys.stdin if line.strip())
    rc = 0
    try:
        for text in inputs:
            rc |= process(dispatcher, text)
    except KeyboardInterrupt:
        logger.warning("interrupted")
        rc = 130
    finally:
        dispatcher.shutdown()
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
