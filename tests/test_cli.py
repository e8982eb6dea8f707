from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest import TestCase

import orjson as json

from ulidkit import ULID
from ulidkit.cli import build_parser, describe, main


def run(*argv) -> tuple:
    stdout, stderr = StringIO(), StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        exit_code = main(list(argv))
    return exit_code, stdout.getvalue(), stderr.getvalue()


class TestCLI(TestCase):

    def test_command_is_required(self):
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit):
            build_parser().parse_args([])

    def test_count_must_be_positive(self):
        for argv in (['bench', '-n', '0'], ['bench', '-n', '-3'], ['generate', '-n', '0'], ['generate', '-n', 'x']):
            stderr = StringIO()
            with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
                main(argv)
            assert context.exception.code == 2
            assert 'invalid' in stderr.getvalue()

    def test_log_level(self):
        args = build_parser().parse_args(['--log-level', 'debug', 'generate'])
        assert args.log_level == 'DEBUG'

        stderr = StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            main(['--log-level', 'verbose', 'generate'])
        assert context.exception.code == 2
        assert 'invalid choice' in stderr.getvalue()

    def test_generate(self):
        exit_code, stdout, _ = run('generate', '-n', '5')
        lines = stdout.splitlines()
        assert exit_code == 0
        assert len(lines) == 5
        assert len(set(lines)) == 5
        for line in lines:
            ULID.unmarshal(line)

    def test_generate_with_timestamp(self):
        exit_code, stdout, _ = run('generate', '--timestamp', '1469918176385', '-n', '3')
        assert exit_code == 0
        for line in stdout.splitlines():
            assert line.startswith('01ARYZ6S41')
            assert ULID.unmarshal(line).timestamp() == 1_469_918_176_385

    def test_generate_json(self):
        exit_code, stdout, _ = run('generate', '--json', '--timestamp', '1469918176385')
        info = json.loads(stdout)
        assert exit_code == 0
        assert info['timestamp'] == 1_469_918_176_385
        assert info['datetime'] == '2016-07-30T22:36:16.385000+00:00'
        assert bytes.fromhex(info['bytes']) == bytes(ULID.unmarshal(info['ulid']))

    def test_inspect(self):
        exit_code, stdout, _ = run('inspect', '01ARYZ6S410000000000000000')
        assert exit_code == 0
        assert 'timestamp=1469918176385' in stdout
        assert 'bytes=01563df3648100000000000000000000' in stdout

    def test_inspect_json(self):
        exit_code, stdout, _ = run('inspect', '--json', '0001C7STHC0G2081040G208104', '01aryz6s410000000000000000')
        first, second = [json.loads(line) for line in stdout.splitlines()]
        assert exit_code == 0
        assert first['timestamp'] == 1_484_581_420
        assert second['ulid'] == '01ARYZ6S410000000000000000'

    def test_inspect_invalid(self):
        exit_code, stdout, stderr = run(
            'inspect', '0001C7STHC0G2O81040G208104', '0001C7STHC0G2O81040G20810', '01ARYZ6S410000000000000000',
        )
        assert exit_code == 1
        assert len(stdout.splitlines()) == 1
        assert 'ERROR: 0001C7STHC0G2O81040G208104' in stderr
        assert 'ERROR: 0001C7STHC0G2O81040G20810' in stderr
        assert 'decode_failed' in stderr

    def test_inspect_json_logging(self):
        _, _, stderr = run('--log-json', 'inspect', 'U' * 26)
        events = [json.loads(line) for line in stderr.splitlines() if line.startswith('{')]
        assert events[0]['event'] == 'decode_failed'
        assert events[0]['level'] == 'warning'
        assert events[0]['value'] == 'U' * 26

    def test_describe_far_future(self):
        info = describe(ULID(b'\xff' * 16))
        assert info['timestamp'] == 2 ** 48 - 1
        assert info['datetime'] is None

    def test_bench(self):
        exit_code, stdout, _ = run('bench', '-n', '10')
        names = [line.split()[0] for line in stdout.splitlines()]
        assert exit_code == 0
        assert names == ['new', 'new_now_random', 'marshal', 'unmarshal', 'timestamp']
