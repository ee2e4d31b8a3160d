import logging
import pytest
from shipmix.utils.logging import SimpleFormatter, ProgressTracker, Colors, setup_logging

class DummyRecord(logging.LogRecord):
    def __init__(self, levelname, msg):
        super().__init__(name="test", level=getattr(logging, levelname), pathname=__file__, lineno=0, msg=msg, args=(), exc_info=None)
        self.levelname = levelname

class DummyBar:
    def __init__(self):
        self.updates = []
        self.writes = []
        self.closed = False
    def update(self, n):
        self.updates.append(n)
    def write(self, msg):
        self.writes.append(msg)
    def close(self):
        self.closed = True

@pytest.mark.parametrize("level, color", [
    ("DEBUG", Colors.GRAY),
    ("INFO", Colors.CYAN),
    ("WARNING", Colors.YELLOW),
    ("ERROR", Colors.RED),
    ("CRITICAL", Colors.RED + Colors.BOLD)
])
def test_simple_formatter_colors(level, color):
    fmt = SimpleFormatter()
    rec = DummyRecord(level, "hello")
    out = fmt.format(rec)
    assert out.startswith(color)
    assert out.endswith(Colors.RESET)
    assert "hello" in out


def test_setup_logging_single_handler():
    setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)
    root = logging.getLogger()
    console = [h for h in root.handlers if isinstance(h.formatter, SimpleFormatter)]
    assert len(console) == 1
    assert root.level == logging.DEBUG


def test_progress_tracker_advance_and_close(monkeypatch):
    import shipmix.utils.logging as logging_utils
    dummy = DummyBar()
    monkeypatch.setattr(logging_utils, 'tqdm', lambda total, desc, bar_format: dummy)

    steps = ['load', 'assign', 'save']
    pt = ProgressTracker(steps)
    assert pt.current_step == 'load'

    pt.advance("msg1", status='success')
    pt.advance()
    assert pt.current_step == 'save'
    pt.advance("oops", status='error')
    assert pt.current_step is None
    pt.close()

    assert dummy.updates == [1, 1, 1]
    assert any("msg1" in w for w in dummy.writes)
    assert any("oops" in w and Colors.RED in w for w in dummy.writes)
    assert any("completed" in w.lower() for w in dummy.writes)
    assert dummy.closed
