"""Tests for the editor session: file handling, key dispatch and painting."""

import errno
import time

from texte.buffer import Buffer
from texte.coordinator import Intent
from texte.geometry import Position
from texte.status import StatusMessage


def press(editor, *tokens):
    """Feed key tokens straight into the editor, bypassing the loop."""
    for token in tokens:
        editor._handle_key_event(editor.keyboard.parse_key(token))


def message_row(editor):
    return editor.terminal.rows[editor.text_area().height + 1]


def test_load_missing_file_starts_new_file(make_editor, tmp_path):
    editor = make_editor()
    path = str(tmp_path / "new.txt")
    editor.load_file(path)
    assert editor.status_message.text == f"new file: {path}"
    assert [line.text for line in editor.buffer] == [""]
    assert editor.buffer.path == path


def test_load_undecodable_file_reports_error(make_editor, tmp_path):
    path = tmp_path / "blob.bin"
    path.write_bytes(b"\xff\xfe\xfa")
    editor = make_editor()
    editor.load_file(str(path))
    assert editor.status_message.text == f"error: could not open file: {path}"
    assert editor.coordinator.buffer is editor.buffer


def test_save_after_failed_load_asks_for_name(make_editor, tmp_path):
    path = tmp_path / "latin1.txt"
    original = b"caf\xe9 precious data\n"
    path.write_bytes(original)
    editor = make_editor()
    editor.load_file(str(path))

    press(editor, '<Ctrl-s>')
    assert editor.prompt_mode == 'save_filename'
    assert path.read_bytes() == original


def test_load_existing_file(make_editor, tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\ntwo\n", encoding="utf-8")
    editor = make_editor()
    editor.load_file(str(path))
    assert editor.status_message.text == "file opened"
    assert editor.buffer.line_count() == 2
    assert editor.modified is False


def test_typing_marks_modified_and_quit_needs_confirmation(make_editor):
    editor = make_editor(keys=['h', 'i', '<Ctrl-q>', '<Ctrl-q>'])
    editor.run()
    assert editor.buffer.line_at(0).text == "hi"
    assert editor.modified is True
    assert editor.running is False
    assert editor.terminal.entered and editor.terminal.exited


def test_other_key_disarms_quit(make_editor):
    editor = make_editor(keys=['a', '<Ctrl-q>', 'b', '<Ctrl-q>', '<Ctrl-q>'])
    editor.run()
    assert editor.buffer.line_at(0).text == "ab"
    assert editor.terminal.keys == []


def test_first_quit_shows_warning(make_editor):
    editor = make_editor()
    press(editor, 'a', '<Ctrl-q>')
    assert editor.quit_armed
    assert editor.status_message.text == "Unsaved changes! Press Ctrl-Q again to quit."


def test_quit_without_confirmation_setting(make_editor):
    editor = make_editor(keys=['a', '<Ctrl-q>'], confirm_quit=False)
    editor.run()
    assert editor.running is False


def test_unmodified_buffer_quits_at_once(make_editor):
    editor = make_editor(keys=['<RIGHT>', '<Ctrl-q>'])
    editor.run()
    assert editor.modified is False
    assert editor.terminal.keys == []


def test_save_in_place(make_editor, tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\n", encoding="utf-8")
    editor = make_editor(keys=['<END>', '!', '<Ctrl-s>', '<Ctrl-q>'])
    editor.load_file(str(path))
    editor.run()
    assert path.read_text(encoding="utf-8") == "one!\n"
    assert editor.modified is False
    assert editor.status_message.text == f"Saved to {path}"


def test_save_as_prompt(make_editor, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    editor = make_editor(width=40)
    press(editor, 'x', '<Ctrl-s>')
    assert editor.prompt_mode == 'save_filename'

    press(editor, 'o', 'u', 'x', '<BACKSPACE>', 't')
    editor.refresh_screen()
    assert message_row(editor) == "Save as: out"
    assert editor.terminal.cursor == (editor.text_area().height + 1, len("Save as: out"))

    press(editor, '.', 't', 'x', 't', '<Ctrl-j>')
    assert editor.prompt_mode is None
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "x\n"
    assert editor.buffer.path == "out.txt"
    assert editor.modified is False


def test_save_as_ignores_empty_name(make_editor):
    editor = make_editor()
    press(editor, '<Ctrl-s>', '<Ctrl-m>')
    assert editor.prompt_mode == 'save_filename'


def test_escape_cancels_save_prompt(make_editor):
    editor = make_editor()
    press(editor, 'x', '<Ctrl-s>', 'a', '<ESC>')
    assert editor.prompt_mode is None
    assert editor.prompt_input == ""
    assert editor.status_message.text == "Save cancelled"
    # Keys typed into the prompt never reach the buffer
    assert editor.buffer.line_at(0).text == "x"


def test_save_permission_error(make_editor, monkeypatch):
    def denied(self, path=None):
        raise PermissionError(errno.EACCES, "denied")

    monkeypatch.setattr(Buffer, "save", denied)
    editor = make_editor()
    press(editor, 'x')
    assert editor.save_file("/root/x.txt") is False
    assert editor.status_message.text == "Error: Permission denied saving /root/x.txt"
    assert editor.modified is True


def test_save_disk_full(make_editor, monkeypatch):
    def full(self, path=None):
        raise OSError(errno.ENOSPC, "No space left on device")

    monkeypatch.setattr(Buffer, "save", full)
    editor = make_editor()
    assert editor.save_file("out.txt") is False
    assert editor.status_message.text == "Error: No space left on device"


def test_render_rows_status_and_message(make_editor, tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("hello\n\tx\n", encoding="utf-8")
    editor = make_editor(width=80)
    editor.load_file(str(path))
    editor.refresh_screen()

    rows = editor.terminal.rows
    assert rows[0] == "hello"
    assert rows[1] == "    x"
    assert rows[2] == "~"
    y, status = editor.terminal.status
    assert y == editor.text_area().height
    assert " - 2 lines" in status
    assert status.endswith("1 / 2")
    assert message_row(editor) == "file opened"
    assert editor.terminal.cursor == (0, 0)


def test_welcome_message_on_empty_buffer(make_editor):
    editor = make_editor(width=40)
    editor.refresh_screen()
    rows = editor.terminal.rows
    welcome_row = editor.text_area().height // 3
    assert rows[welcome_row].startswith("~")
    assert "texte -- v" in rows[welcome_row]
    assert rows[0] == "~"


def test_modified_marker_in_status(make_editor):
    editor = make_editor(width=60)
    press(editor, 'a')
    editor.refresh_screen()
    assert "(modified)" in editor.terminal.status[1]


def test_cursor_after_tab_is_expanded(make_editor):
    editor = make_editor()
    press(editor, '\t', 'a')
    editor.refresh_screen()
    assert editor.terminal.rows[0] == "    a"
    assert editor.terminal.cursor == (0, 5)


def test_vertical_scroll_rendering(make_editor):
    editor = make_editor(width=20, height=8)
    editor.buffer.lines[:] = Buffer.from_text(
        "".join(f"line {i}\n" for i in range(20))).lines
    for _ in range(10):
        editor.coordinator.apply(Intent.DOWN)
    editor.refresh_screen()

    assert editor.coordinator.offset.line == 6
    assert editor.terminal.rows[0] == "line 6"
    assert editor.terminal.cursor == (4, 0)


def test_horizontal_scroll_rendering(make_editor):
    editor = make_editor(width=20, height=8)
    press(editor, *"abcdefghijklmnopqrstuvwxyz0123")
    editor.refresh_screen()

    assert editor.coordinator.cursor == Position(30, 0)
    assert editor.coordinator.offset.column == 12
    assert editor.terminal.rows[0] == "mnopqrstuvwxyz0123"
    assert editor.terminal.cursor == (0, 18)


def test_resize_rescrolls_on_refresh(make_editor):
    editor = make_editor(width=20, height=12)
    editor.buffer.lines[:] = Buffer.from_text("a\n" * 10).lines
    editor.coordinator.cursor = Position(0, 8)
    editor.refresh_screen()
    assert editor.coordinator.offset.line == 0

    editor.terminal.height = 5
    editor.refresh_screen()
    y, _ = editor.terminal.cursor
    assert 0 <= y < editor.text_area().height


def test_stale_message_is_hidden(make_editor):
    editor = make_editor()
    editor.status_message = StatusMessage("old news", time=time.monotonic() - 100)
    editor.refresh_screen()
    assert message_row(editor) == ""


def test_message_timeout_setting(make_editor):
    editor = make_editor(message_timeout=1000.0)
    editor.status_message = StatusMessage("still here", time=time.monotonic() - 100)
    editor.refresh_screen()
    assert message_row(editor) == "still here"


def test_page_down_moves_one_screen(make_editor):
    editor = make_editor(width=20, height=8)
    editor.buffer.lines[:] = Buffer.from_text(
        "".join(f"line {i}\n" for i in range(20))).lines
    press(editor, '<PAGEDOWN>')
    assert editor.coordinator.cursor.line == editor.text_area().height
    editor.refresh_screen()
    y, _ = editor.terminal.cursor
    assert 0 <= y < editor.text_area().height
