import sys

import pytest

from record_screen import VerificationError, VideoVerifier

pytestmark = pytest.mark.skipif(sys.platform == 'win32', reason="Uses shebang scripts")


def test_get_duration(fake_exit):
    verifier = VideoVerifier(ffprobe_path=fake_exit(0, stdout='2.533000\n', name='ffprobe'))
    assert verifier.get_duration('/tmp/test.mp4') == pytest.approx(2.533)


def test_get_rotate_metadata(fake_exit):
    verifier = VideoVerifier(ffprobe_path=fake_exit(0, stdout='270\n', name='ffprobe'))
    assert verifier.get_rotate_metadata('/tmp/test.mp4') == 270


def test_unparsable_probe_output(fake_exit):
    verifier = VideoVerifier(ffprobe_path=fake_exit(0, stdout='\n', name='ffprobe'))
    with pytest.raises(VerificationError, match='format=duration'):
        verifier.get_duration('/tmp/test.mp4')


def test_check_integrity_passes(fake_exit):
    VideoVerifier(ffmpeg_path=fake_exit(0, name='ffmpeg')).check_integrity('/tmp/test.mp4')


def test_check_integrity_fails(fake_exit):
    ffmpeg = fake_exit(1, stderr='moov atom not found\n', name='ffmpeg')
    with pytest.raises(VerificationError, match='moov atom not found') as exc_info:
        VideoVerifier(ffmpeg_path=ffmpeg).check_integrity('/tmp/test.mp4')
    assert exc_info.value.cmd == f'{ffmpeg} -v error -i /tmp/test.mp4 -f null -'


def test_missing_tool(tmp_path):
    verifier = VideoVerifier(ffprobe_path=str(tmp_path / 'ffprobe'))
    with pytest.raises(VerificationError, match='not found'):
        verifier.get_duration('/tmp/test.mp4')
