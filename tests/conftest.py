import asyncio
import os
import stat
import sys
import time

import pytest

RECORDER_SCRIPT = '''#!{python}
import signal
import sys
import time

output = sys.argv[-1]


def finalize(signum, frame):
    with open(output, 'w') as f:
        f.write('video')
    sys.stderr.write('Exiting normally, received signal %d.\\n' % signum)
    sys.exit(255)


signal.signal(signal.SIGINT, finalize)
open(output + '.ready', 'w').close()
while True:
    time.sleep(0.05)
'''

EXIT_SCRIPT = '''#!{python}
import sys

sys.stdout.write({stdout!r})
sys.stderr.write({stderr!r})
sys.exit({code})
'''


def _write_executable(path, content):
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def fake_recorder(tmp_path):
    """An ffmpeg stand-in that records until it receives SIGINT, then exits 255."""
    return _write_executable(tmp_path / 'ffmpeg', RECORDER_SCRIPT.format(python=sys.executable))


@pytest.fixture
def fake_exit(tmp_path):
    """Factory for executables that print the given output and exit with `code`."""
    def factory(code, stdout='', stderr='', name='tool'):
        content = EXIT_SCRIPT.format(python=sys.executable, code=code, stdout=stdout, stderr=stderr)
        return _write_executable(tmp_path / name, content)
    return factory


@pytest.fixture
def wait_until_ready():
    async def wait(video_file, timeout=10.0):
        deadline = time.monotonic() + timeout
        while not os.path.exists(f"{video_file}.ready"):
            if time.monotonic() > deadline:
                raise TimeoutError(f"fake ffmpeg did not start for {video_file}")
            await asyncio.sleep(0.02)
    return wait
