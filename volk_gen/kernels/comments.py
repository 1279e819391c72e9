# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""C comment removal that leaves string and character literals intact."""


def remove_comments(code: str) -> str:
    """Strip ``//`` and ``/* */`` comments from C source.

    Line comments keep their terminating newline so line structure is
    preserved for the preprocessor scan. Comment markers inside ``"..."`` or
    ``'...'`` literals are copied through, honoring backslash escapes.
    """
    out = []
    in_line_comment = False
    in_block_comment = False
    quote = ""

    i = 0
    n = len(code)
    while i < n:
        c = code[i]
        nxt = code[i + 1] if i + 1 < n else ""

        if in_line_comment:
            if c == "\n":
                in_line_comment = False
                out.append(c)
        elif in_block_comment:
            if c == "*" and nxt == "/":
                in_block_comment = False
                i += 1
        elif quote:
            out.append(c)
            if c == "\\" and nxt:
                out.append(nxt)
                i += 1
            elif c == quote:
                quote = ""
        elif c in ("\"", "'"):
            quote = c
            out.append(c)
        elif c == "/" and nxt == "/":
            in_line_comment = True
            i += 1
        elif c == "/" and nxt == "*":
            in_block_comment = True
            i += 1
        else:
            out.append(c)
        i += 1

    return "".join(out)
