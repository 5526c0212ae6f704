def pad_values(values, offset: int, widths) -> str:
    # values wider than their column are kept whole; the line just misaligns
    if len(values) != len(widths):
        raise ValueError(f"got {len(values)} values for {len(widths)} columns")
    cells = [str(v).ljust(w) for v, w in zip(values, widths)]
    return " " * max(0, offset) + " ".join(cells)


def underline(text: str) -> str:
    return "".join(" " if ch == " " else "-" for ch in text)
