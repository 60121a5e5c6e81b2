"""Line-based scanner for ES module import and export statements.

The scanner does not parse JavaScript. It looks at lines starting with the
``import`` or ``export`` keyword and extracts names with a handful of
regular expressions. Known limitations:

- Export declarations must fit on one line.
- An import is complete once its accumulated text holds exactly two single
  or two double quotes, i.e. the closing ``from '<path>'``. Quotes inside
  the import clause (or a trailing comment containing quotes) defeat this.
- Only relative (``.``) and absolute (``/``) module paths are tracked;
  package imports are ignored.
"""

import re
from typing import Iterable, List, Union

from graph.statements import NAMESPACE_NAME, ExportStatement, ImportStatement, Module
from .errors import ScanError


STATEMENT_START_RE = re.compile(r"^(export|import)\b")

# Name patterns, tried in order.
FUNCTION_RE = re.compile(r"function\s+([\w$]*)")
VAR_RE = re.compile(r"(?:var|let|const)\s+([\w$]*)")
DEFAULT_RE = re.compile(r"default\s+([\w$]*)")

NAMESPACE_RE = re.compile(r"\*\s*as\s+([\w$]+)")

# import <name> from '<path>'
MIN_DEFAULT_IMPORT_TOKENS = 4

INTERNAL_PATH_PREFIXES = (".", "/")


def scan(stream: Union[str, Iterable[str]], path: str) -> Module:
    """
    Scan module text into a Module holding its imports and exports.

    Args:
        stream: An open text stream, an iterable of lines, or the full text.
        path: The module's canonical path, copied onto every export.

    Returns:
        The populated Module. A statement left unfinished at end of input
        is dropped.

    Raises:
        ScanError: If reading fails or an import has no recognizable shape.
    """
    if isinstance(stream, str):
        stream = stream.splitlines()

    module = Module(path)
    mode = None
    buffer: List[str] = []
    start_line = 0
    line_nr = 0

    try:
        for raw in stream:
            line_nr += 1
            line = raw.strip()

            keyword = STATEMENT_START_RE.match(line)
            if keyword:
                mode = keyword.group(1)
                start_line = line_nr
                buffer = []

            if mode is None:
                continue

            buffer.append(line)
            text = " ".join(buffer)

            if mode == "export":
                module.add_export(
                    ExportStatement(
                        path=path,
                        line=start_line,
                        name=find_name(text),
                        signature=clean_sig(text),
                    )
                )
            elif _is_complete_import(text):
                for imp in find_imports(text, path, start_line):
                    module.add_import(imp)
            else:
                continue

            mode = None
            buffer = []
    except (OSError, UnicodeDecodeError) as e:
        raise ScanError(path, f"read failed: {e}", line_nr + 1) from e

    return module


def _is_complete_import(text: str) -> bool:
    return text.count("'") == 2 or text.count('"') == 2


def find_name(sig: str) -> str:
    """
    Extract the declared name from a single-line export.

    Handles function declarations, var/let/const and default exports.
    Returns an empty string when no name can be found.
    """
    for pattern in (FUNCTION_RE, VAR_RE, DEFAULT_RE):
        match = pattern.search(sig)
        if match:
            return match.group(1)
    return ""


def find_imports(sig: str, path: str = "", line: int = 0) -> List[ImportStatement]:
    """
    Build one ImportStatement per binding of a complete import statement.

    Args:
        sig: The import statement, joined onto a single line.
        path: The importing module, used in error messages.
        line: Line number of the statement, used in error messages.

    Returns:
        The imported bindings, or an empty list for side-effect imports and
        imports of external packages.

    Raises:
        ScanError: If the statement has no recognizable shape.
    """
    sig = sig.rstrip("; \n\t")
    tokens = sig.split()

    module_path = ""
    for i, token in enumerate(tokens[:-1]):
        if token == "from":
            module_path = tokens[i + 1].strip("'\";")
            break

    if not module_path or not module_path.startswith(INTERNAL_PATH_PREFIXES):
        return []

    # import * as alias from ...
    match = NAMESPACE_RE.search(sig)
    if match:
        return [ImportStatement(NAMESPACE_NAME, module_path, match.group(1))]

    # import name from ...
    open_brace = sig.find("{")
    if open_brace < 0:
        if len(tokens) < MIN_DEFAULT_IMPORT_TOKENS:
            raise ScanError(path, f"unreadable import statement: {sig!r}", line)
        return [ImportStatement(tokens[1], module_path)]

    # import { a, b as c } from ...
    close_brace = sig.find("}", open_brace)
    if close_brace < 0:
        raise ScanError(path, f"unterminated import group: {sig!r}", line)

    imports: List[ImportStatement] = []

    # import name, { a } from ...
    head = sig[:open_brace].split()
    if len(head) == 2:
        default_name = head[1].rstrip(",")
        if default_name and default_name != "type":
            imports.append(ImportStatement(default_name, module_path))

    for part in sig[open_brace + 1:close_brace].split(","):
        words = part.split()
        if words:
            imports.append(ImportStatement(words[0], module_path))

    return imports


def clean_sig(sig: str) -> str:
    """
    Clean a signature for display.

    Drops inline comments (from ``#`` or ``//`` to the end) and strips
    surrounding whitespace and opening braces. Applying it twice gives the
    same result as applying it once.
    """
    cleaned = sig
    if "#" in cleaned:
        cleaned = cleaned[:cleaned.index("#")]
    if "//" in cleaned:
        cleaned = cleaned[:cleaned.index("//")]
    return cleaned.strip(" \t\r\n{")
