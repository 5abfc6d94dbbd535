import logging
import sys

from statusbar_keyboard import logging as log_setup


def test_setup_writes_to_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(root, "level", root.level)

    log_file = tmp_path / "kb.log"
    log_setup.setup("debug", log_file=log_file, console=False)
    logging.getLogger("statusbar_keyboard.test").debug("hello there")
    for handler in root.handlers:
        handler.flush()

    assert root.level == logging.DEBUG
    assert "hello there" in log_file.read_text()
    assert sys.excepthook is not sys.__excepthook__


def test_unknown_level_name_falls_back_to_info(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(root, "level", root.level)

    log_setup.setup("chatty", log_file=tmp_path / "kb.log", console=False)
    assert root.level == logging.INFO
