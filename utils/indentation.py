def spaces_to_tabs(data: bytes) -> bytes:
    """Turn each complete run of four leading spaces into a tab, line by line.

    A remainder of 1-3 spaces stays after the tabs. Lines holding nothing but
    spaces are left alone, and no byte past the leading run is touched.
    """
    lines = data.split(b"\n")
    for i, line in enumerate(lines):
        rest = line.lstrip(b" ")
        if not rest:
            continue
        spaces = len(line) - len(rest)
        if spaces >= 4:
            lines[i] = b"\t" * (spaces // 4) + b" " * (spaces % 4) + rest
    return b"\n".join(lines)
