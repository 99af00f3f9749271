"""AppleScript construction - text escaping and session-addressed script shapes.

AppleScript string literals are double-quoted with backslash escapes and have
no multi-line form, and the finished script travels to osascript inside a
single-quoted shell word. Escaping happens here and nowhere else.

PUBLIC API:
  - escape_applescript: Escape one line for an AppleScript string literal
  - quote_for_shell: Make text safe inside a single-quoted shell word
  - encode_text: Encode arbitrary text as an AppleScript string argument
  - EncodedText: Result of encode_text
  - Query, Command: Actions a session script can perform
  - write_text, write_control: Build write actions
  - render_session_script: Render an action addressed to a session
  - render_list_script: Render the session enumeration script
"""

import re
from dataclasses import dataclass

from ..types import CurrentSession, SessionByPath, SessionRef

__all__ = [
    "escape_applescript",
    "quote_for_shell",
    "encode_text",
    "EncodedText",
    "Query",
    "Command",
    "IS_PROCESSING",
    "CONTENTS",
    "TTY",
    "write_text",
    "write_control",
    "render_session_script",
    "render_list_script",
    "LINE_JOIN",
    "FIELD_SEPARATOR",
]

_NON_PRINTABLE = re.compile(r"[^\x20-\x7e]")

# Concatenation with AppleScript's own line-break constant
LINE_JOIN = " & return & "

FIELD_SEPARATOR = "\t"


def _unicode_escape(match: re.Match) -> str:
    """Escape one character as \\uXXXX per UTF-16 code unit."""
    encoded = match.group(0).encode("utf-16-be")
    return "".join(f"\\u{int.from_bytes(encoded[i : i + 2], 'big'):04x}" for i in range(0, len(encoded), 2))


def escape_applescript(text: str) -> str:
    """Escape a single line for use inside an AppleScript string literal.

    Backslashes and double quotes are escaped, anything outside printable
    ASCII becomes a lower-case \\uXXXX escape.

    Args:
        text: Text without line breaks.
    """
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    return _NON_PRINTABLE.sub(_unicode_escape, text)


def quote_for_shell(text: str) -> str:
    """Close, escape and reopen the shell quote around every single quote."""
    return text.replace("'", "'\\''")


@dataclass(frozen=True)
class EncodedText:
    """Text ready to be written to a session.

    Attributes:
        value: Escaped literal body (single line) or a concatenation
            expression (multi-line).
        multiline: True when value is an expression, not a literal body.
    """

    value: str
    multiline: bool

    @property
    def argument(self) -> str:
        """Render as the argument of a write text statement."""
        if self.multiline:
            return f"({self.value})"
        return f'"{self.value}"'


def encode_text(text: str) -> EncodedText:
    """Encode arbitrary text for the automation bridge.

    Single-line text is escaped into a literal body. Multi-line text is split
    on line breaks (CRLF counts as one break), each line escaped on its own,
    and the quoted lines joined with the host's line-break constant so the
    breaks are inserted at run time.

    Args:
        text: Any text, possibly containing line breaks.

    Returns:
        EncodedText; callers emit it through EncodedText.argument.
    """
    text = text.replace("\r\n", "\n")
    if "\n" not in text:
        return EncodedText(quote_for_shell(escape_applescript(text)), multiline=False)

    expression = LINE_JOIN.join(f'"{escape_applescript(line)}"' for line in text.split("\n"))
    return EncodedText(quote_for_shell(expression), multiline=True)


@dataclass(frozen=True)
class Query:
    """Read a session property and return it as the script result."""

    property: str


@dataclass(frozen=True)
class Command:
    """Perform a statement against a session; the script returns true."""

    statement: str


type Action = Query | Command

IS_PROCESSING = Query("is processing")
CONTENTS = Query("contents")
TTY = Query("tty")


def write_text(encoded: EncodedText) -> Command:
    """Type text into the session followed by a newline."""
    return Command(f"write text {encoded.argument}")


def write_control(code: int) -> Command:
    """Write one raw character with no trailing newline."""
    return Command(f"write text (ASCII character {code}) newline no")


def _literal(value: str) -> str:
    return f'"{quote_for_shell(escape_applescript(value))}"'


def _render_current(application: str, action: Action) -> str:
    if isinstance(action, Query):
        statement = f"get {action.property}"
    else:
        statement = action.statement
    return f"tell application {_literal(application)} to tell current session of current window to {statement}"


def _render_by_path(application: str, tty_path: str, action: Action) -> str:
    if isinstance(action, Query):
        body = f"return {action.property}"
    else:
        body = f"{action.statement}\n            return true"

    # Sessions that vanish mid-enumeration are skipped, not fatal
    return f"""tell application {_literal(application)}
  set targetTty to {_literal(tty_path)}
  repeat with aWindow in windows
    repeat with aTab in tabs of aWindow
      repeat with aSession in sessions of aTab
        set sessionTty to ""
        try
          set sessionTty to tty of aSession
        end try
        considering case
          set isTarget to (sessionTty is targetTty)
        end considering
        if isTarget then
          tell aSession
            {body}
          end tell
        end if
      end repeat
    end repeat
  end repeat
  error "Session with TTY " & targetTty & " not found"
end tell"""


def render_session_script(ref: SessionRef, action: Action, application: str = "iTerm2") -> str:
    """Render an action addressed to one session.

    Args:
        ref: Focused session or a session by device path.
        action: Query or Command to perform.
        application: Host application name.

    Returns:
        Shell-quoted AppleScript source for bridge.core.invoke.
    """
    match ref:
        case CurrentSession():
            return _render_current(application, action)
        case SessionByPath(tty_path=tty_path):
            return _render_by_path(application, tty_path, action)
    raise TypeError(f"Unsupported session reference: {ref!r}")


def render_list_script(application: str = "iTerm2") -> str:
    """Render the script listing every session, one tab-separated row each.

    Row fields: window, tab, session (1-based), tty, is processing, name.
    """
    return f"""set fieldSep to character id 9
set output to ""
tell application {_literal(application)}
  set windowIndex to 0
  repeat with aWindow in windows
    set windowIndex to windowIndex + 1
    set tabIndex to 0
    repeat with aTab in tabs of aWindow
      set tabIndex to tabIndex + 1
      set sessionIndex to 0
      repeat with aSession in sessions of aTab
        set sessionIndex to sessionIndex + 1
        try
          set row to (windowIndex as text) & fieldSep & tabIndex & fieldSep & sessionIndex
          set row to row & fieldSep & (tty of aSession) & fieldSep & (is processing of aSession)
          set output to output & row & fieldSep & (name of aSession) & linefeed
        end try
      end repeat
    end repeat
  end repeat
end tell
return output"""
