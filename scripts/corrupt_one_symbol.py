import sys
from pathlib import Path

from zwm_core.protocol import DIGIT_POOL, FRAME_SEP


def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_symbol.py <carrier.txt>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    text = p.read_bytes().decode("utf-8")
    if FRAME_SEP not in text:
        print("No frame to corrupt.")
        raise SystemExit(2)

    # Replace the first payload symbol (right after the first separator)
    # with the next digit symbol, keeping the frame the same length.
    idx = text.index(FRAME_SEP) + 1
    old = DIGIT_POOL.index(text[idx])
    new = DIGIT_POOL[(old + 1) % len(DIGIT_POOL)]
    p.write_bytes((text[:idx] + new + text[idx + 1:]).encode("utf-8"))
    print(f"Corrupted 1 symbol at offset {idx} in {p}")

if __name__ == "__main__":
    main()
