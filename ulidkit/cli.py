from __future__ import annotations

import argparse
import sys
import time
from typing import Callable, List, Optional

import orjson as json

from ulidkit.exceptions import ULIDException
from ulidkit.generator import Generator, current_timestamp, random_byte
from ulidkit.log import configure_logging, get_logger
from ulidkit.ulid import ULID

logger = get_logger(__name__)


def describe(ulid: ULID) -> dict:
    try:
        moment = ulid.datetime().isoformat()
    except OverflowError:
        # Past year 9999
        moment = None

    return {
        'ulid': ulid.marshal(),
        'timestamp': ulid.timestamp(),
        'datetime': moment,
        'bytes': ulid.to_bytes().hex(),
    }


def cmd_generate(args: argparse.Namespace) -> int:
    clock = (lambda: args.timestamp) if args.timestamp is not None else None
    generator = Generator(clock=clock)
    logger.debug('generate', count=args.count, fixed_timestamp=args.timestamp)

    for _ in range(args.count):
        ulid = generator.new()
        if args.json:
            print(json.dumps(describe(ulid)).decode())
        else:
            print(ulid)
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    exit_code = 0
    for value in args.ulids:
        try:
            ulid = ULID.unmarshal(value)
        except ULIDException as e:
            logger.warning('decode_failed', value=value, error=str(e))
            print(f'ERROR: {value}: {e}', file=sys.stderr)
            exit_code = 1
            continue

        info = describe(ulid)
        if args.json:
            print(json.dumps(info).decode())
        else:
            print(f"{info['ulid']}  timestamp={info['timestamp']}  datetime={info['datetime']}  bytes={info['bytes']}")
    return exit_code


def _time_per_call(func: Callable[[], object], iterations: int) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        func()
    return (time.perf_counter() - start) / iterations * 1e9


def cmd_bench(args: argparse.Namespace) -> int:
    iterations = args.iterations
    sample = ULID.new(current_timestamp(), random_byte)
    text = sample.marshal()
    logger.debug('bench', iterations=iterations, sample=text)

    cases = [
        ('new', lambda: ULID.new(20, lambda: 4)),
        ('new_now_random', lambda: ULID.new(current_timestamp(), random_byte)),
        ('marshal', sample.marshal),
        ('unmarshal', lambda: ULID.unmarshal(text)),
        ('timestamp', sample.timestamp),
    ]
    for name, func in cases:
        print(f'{name:<16} {_time_per_call(func, iterations):>10.1f} ns/call')
    return 0


LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f'invalid count {number}, must be at least 1')
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ulidkit', description='Generate and inspect ULIDs')
    parser.add_argument('--log-level', default='WARNING', type=str.upper, choices=LOG_LEVELS)
    parser.add_argument('--log-json', action='store_true', help='Log JSON lines to stderr')
    sub = parser.add_subparsers(dest='command', required=True)

    generate = sub.add_parser('generate', help='Print new ULIDs')
    generate.add_argument('-n', '--count', type=positive_int, default=1)
    generate.add_argument('--timestamp', type=int, default=None, help='Fixed timestamp in milliseconds')
    generate.add_argument('--json', action='store_true')
    generate.set_defaults(func=cmd_generate)

    inspect = sub.add_parser('inspect', help='Decode ULIDs and show their parts')
    inspect.add_argument('ulids', nargs='+')
    inspect.add_argument('--json', action='store_true')
    inspect.set_defaults(func=cmd_inspect)

    bench = sub.add_parser('bench', help='Time the codec')
    bench.add_argument('-n', '--iterations', type=positive_int, default=100_000)
    bench.set_defaults(func=cmd_bench)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(log_level=args.log_level, json_output=args.log_json)
    return args.func(args)
