from record_screen.progress_display import RecordingProgress


def test_progress_counts_whole_seconds():
    progress = RecordingProgress("Recording", duration=10)
    progress.update(0.4)
    assert progress.tqdm_bar.n == 0
    progress.update(2.7)
    assert progress.tqdm_bar.n == 2
    progress.update(2.9)
    assert progress.tqdm_bar.n == 2
    progress.finish()


def test_progress_without_duration():
    progress = RecordingProgress("Recording")
    assert progress.tqdm_bar.total is None
    progress.update(3)
    assert progress.tqdm_bar.n == 3
    progress.finish()
