"""
Argscribe text layout: greedy line wrapping and two-column joining.

wrap(src, width, prefix="", postfix="", /, dest="")
- Breaks src into lines of at most `width` characters, prefix and postfix included.
- Breaks after the last delimiter inside each window; a delimiter is any character
  that is neither alphanumeric nor an opening mark (see OPENING_MARKS), so lines
  never end right before the word they introduce ("<money>", "(inclusive)", ...).
- Hard-wraps a window that holds no delimiter (one unbreakable word).
- Leading spaces of a continuation line are skipped.

join(left, right, indent, /, dest="")
- Zips two already wrapped blocks line by line: each left line is padded to
  `indent` columns and followed by the matching right line. Once left runs out,
  right lines are indented by `indent` spaces; left lines that outlive right are
  appended verbatim.

Both functions return `dest` followed by the new text, so several calls can be
chained into one accumulating buffer without disturbing what it already holds.

Quick example:
    >>> print(join(wrap("-a, --add <money>", 24, "    ", "  "),
    ...            wrap("Adds an expense or income record", 20), 24), end="")
        -a, --add <money>   Adds an expense or
                            income record
"""

OPENING_MARKS = frozenset("<'\"[{(")


def _is_delimiter(char):
    return not char.isalnum() and char not in OPENING_MARKS


def _skip_spaces(src, index):
    """
    index of the first non-space character at or after `index`, or None.
    """
    while index < len(src):
        if src[index] != " ":
            return index
        index += 1
    return None


def wrap(src, width, prefix="", postfix="", /, dest=""):
    """
    Wrap `src` into lines of at most `width` characters including prefix and postfix.

    Parameters
    - src: str
      Single-paragraph text to wrap (line terminators inside src are not special).
    - width: int
      Maximum line length, prefix and postfix included, terminator excluded.
    - prefix, postfix: str
      Decorations added to every emitted line.
    - dest: str
      Existing output to append to.

    Returns
    - dest followed by every wrapped line, each ending in "\\n".

    Raises
    - ValueError: when prefix and postfix leave no room for content.
    """
    if (window := width - len(prefix) - len(postfix)) < 1:
        raise ValueError("wrap() width %d leaves no room for content" % width)

    lines = [dest]
    begin = 0 if src else None
    while begin is not None:
        if begin + window > len(src):
            lines.append(prefix + src[begin:] + postfix + "\n")
            break

        end = begin + window - 1
        # Last delimiter in the window; the first character never counts, or the
        # line would carry a lone mark.
        cut = next((index for index in range(end, begin, -1) if _is_delimiter(src[index])), end)

        lines.append(prefix + src[begin:cut + 1] + postfix + "\n")
        begin = _skip_spaces(src, cut + 1)

    return "".join(lines)


def join(left, right, indent, /, dest=""):
    """
    Join two wrapped multi-line strings into aligned columns.

    Parameters
    - left: str
      Label column block; each line is padded to `indent` columns.
    - right: str
      Description column block; drives the number of emitted rows.
    - indent: int
      Width of the left column.
    - dest: str
      Existing output to append to.

    Returns
    - dest followed by the joined rows.
    """
    lefts = left.splitlines(keepends=True)
    rights = right.splitlines(keepends=True)

    rows = [dest]
    for index, line in enumerate(rights):
        try:
            label = lefts[index].rstrip("\r\n")
        except IndexError:
            label = ""
        rows.append(label.ljust(indent) + line)

    # left outlived right: keep its remaining lines as they are
    rows.extend(lefts[len(rights):])
    return "".join(rows)


__all__ = (
    "OPENING_MARKS",
    "wrap",
    "join",
)
