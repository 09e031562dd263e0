"""Cursor-addressed text buffer used while writing and editing entries."""


def line_start(text: str, cursor: int) -> int:
    """Offset of the first character of the line containing cursor."""
    return text.rfind("\n", 0, cursor) + 1


def line_end(text: str, cursor: int) -> int:
    """Offset of the newline ending the line containing cursor (or len(text))."""
    end = text.find("\n", cursor)
    return len(text) if end == -1 else end


def cursor_up(text: str, cursor: int) -> int:
    """Cursor moved to the same column of the previous line."""
    start = line_start(text, cursor)
    if start == 0:
        return cursor
    prev_start = line_start(text, start - 1)
    prev_length = (start - 1) - prev_start
    return prev_start + min(cursor - start, prev_length)


def cursor_down(text: str, cursor: int) -> int:
    """Cursor moved to the same column of the next line."""
    end = text.find("\n", cursor)
    if end == -1:
        return cursor
    next_start = end + 1
    next_length = line_end(text, next_start) - next_start
    return next_start + min(cursor - line_start(text, cursor), next_length)


class LineBuffer:
    """
    Mutable text plus a cursor offset.

    All operations are total: anything that would move the cursor out of
    [0, len(text)] is a no-op.
    """

    def __init__(self, text: str = "", cursor: int = 0):
        self.text = text
        self.cursor = max(0, min(cursor, len(text)))

    @classmethod
    def for_new(cls, text: str = "") -> "LineBuffer":
        return cls(text, 0)

    @classmethod
    def for_edit(cls, text: str) -> "LineBuffer":
        return cls(text, len(text))

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        return f"LineBuffer(text={self.text!r}, cursor={self.cursor})"

    @property
    def row(self) -> int:
        return self.text.count("\n", 0, self.cursor)

    @property
    def column(self) -> int:
        return self.cursor - line_start(self.text, self.cursor)

    def lines(self) -> list[str]:
        return self.text.split("\n")

    # ============== Editing ==============

    def insert_text(self, s: str) -> None:
        self.text = self.text[: self.cursor] + s + self.text[self.cursor :]
        self.cursor += len(s)

    def insert_char(self, c: str) -> None:
        self.insert_text(c)

    def insert_newline(self) -> None:
        self.insert_text("\n")

    def delete_before(self) -> None:
        """Backspace."""
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete_at(self) -> None:
        """Forward delete."""
        if self.cursor >= len(self.text):
            return
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    # ============== Motion ==============

    def move_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def move_up(self) -> None:
        self.cursor = cursor_up(self.text, self.cursor)

    def move_down(self) -> None:
        self.cursor = cursor_down(self.text, self.cursor)

    def take(self) -> str:
        """Return the text and reset the buffer."""
        text = self.text
        self.text = ""
        self.cursor = 0
        return text
