import csv

import chardet

DELIMITER_CANDIDATES = [',', '\t', ';', '|']


def detect_encoding(path: str, sample_size: int = 4096) -> str:
    with open(path, "rb") as f:
        raw = f.read(sample_size)
    if not raw:
        return "utf-8"
    res = chardet.detect(raw)
    enc = res.get("encoding") or "utf-8"
    # ascii is a subset; utf-8 also covers any non-ascii bytes past the sample
    return "utf-8" if enc.lower() == "ascii" else enc


def detect_delimiter(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding, errors="ignore") as f:
        sample = f.read(16384)

    try:
        delim = csv.Sniffer().sniff(sample, delimiters=''.join(DELIMITER_CANDIDATES)).delimiter
        if delim in DELIMITER_CANDIDATES:
            return delim
    except csv.Error:
        pass

    # fallback: pick the delimiter giving the most, and most stable, column counts
    lines = [l for l in sample.splitlines() if l.strip()][:20]
    if not lines:
        return ','
    best, best_score = ',', float('-inf')
    for d in DELIMITER_CANDIDATES:
        counts = [len(l.split(d)) for l in lines]
        score = (sum(counts) / len(counts)) - (max(counts) - min(counts)) * 0.1
        if score > best_score:
            best_score = score
            best = d
    return best
