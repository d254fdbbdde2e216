import threading

from fhsite.progress import ProgressReporter


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_reports_at_interval_and_on_completion(capsys):
    clock = FakeClock()
    progress = ProgressReporter(3, interval=10, clock=clock)
    progress.advance()
    assert capsys.readouterr().out == ""
    clock.now = 11
    progress.advance()
    assert capsys.readouterr().out == "Built 2/3 pages.\n"
    clock.now = 12
    progress.advance()
    assert capsys.readouterr().out == "Built 3/3 pages.\n"


def test_counter_is_thread_safe(capsys):
    progress = ProgressReporter(800, interval=3600)

    def work():
        for _ in range(100):
            progress.advance()

    threads = [threading.Thread(target=work) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert progress.done == 800
    assert capsys.readouterr().out == "Built 800/800 pages.\n"
