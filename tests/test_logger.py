from src.core.logger import Logger

from conftest import TOKEN


def _read(path) -> str:
    return path.read_text(encoding="utf-8")


def test_tree_goes_to_main_log_only(tmp_path):
    logger = Logger(tmp_path)

    logger.tree("Served Request", [("ID", "123"), ("User", "nea#0007")])

    text = _read(logger.log_file)
    assert "Served Request" in text
    assert "├─ ID: 123" in text
    assert "└─ User: nea#0007" in text
    assert "Served Request" not in _read(logger.error_file)


def test_errors_also_go_to_error_log(tmp_path):
    logger = Logger(tmp_path)

    logger.error_tree("Discord Lookup Failed", RuntimeError("boom"), [("User ID", 123)])

    errors = _read(logger.error_file)
    assert "Discord Lookup Failed" in errors
    assert "Type: RuntimeError" in errors
    assert "User ID: 123" in errors


def test_debug_needs_debug_env(tmp_path, monkeypatch):
    logger = Logger(tmp_path)

    monkeypatch.delenv("DEBUG", raising=False)
    logger.debug("Hidden Line")
    monkeypatch.setenv("DEBUG", "1")
    logger.debug("Visible Line")

    text = _read(logger.log_file)
    assert "Hidden Line" not in text
    assert "Visible Line" in text


def test_old_log_folders_are_removed(tmp_path):
    old = tmp_path / "2001-01-01"
    old.mkdir()
    keep = tmp_path / "not-a-date"
    keep.mkdir()

    Logger(tmp_path)

    assert not old.exists()
    assert keep.exists()


def test_exception_traceback_masks_token(tmp_path):
    logger = Logger(tmp_path)

    try:
        raise RuntimeError(f"Authorization: Bot {TOKEN}")
    except RuntimeError:
        logger.exception("Unhandled API Error", [("Path", "/avatar/123.json")])

    for path in (logger.log_file, logger.error_file):
        text = _read(path)
        assert "RuntimeError" in text
        assert TOKEN not in text
