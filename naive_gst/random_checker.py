from __future__ import annotations

import argparse
import logging
import os
import random
import statistics
import time
from pathlib import Path
from typing import List, Tuple

import psutil

from naive_gst.checker import check_answer
from naive_gst.suffix_tree import GeneralizedSuffixTree

# Experiment parameters


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run random checker for the naive generalized suffix tree.")
    parser.add_argument(
        "--base_length",
        "-b",
        type=int,
        default=20,
        help="Base length for total lengths (default: 20).",
    )
    parser.add_argument(
        "--steps",
        "-s",
        type=int,
        default=10,
        help="Number of total lengths to try, as multiples of the base length (default: 10).",
    )
    parser.add_argument(
        "--repeats",
        "-r",
        type=int,
        default=30,
        help="Number of independent trials per total length (default: 30).",
    )
    parser.add_argument(
        "--alphabet",
        "-a",
        type=str,
        default="ACGT",
        help="Characters to draw random strings from (default: ACGT).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output for debugging.",
    )
    return parser.parse_args(argv)


NUM_STRINGS_CHOICES: List[int] = [2, 3, 4, 5]

###############################################################################
# Helper functions                                                            #
###############################################################################


def random_string(n: int, alphabet: str) -> str:
    return "".join(random.choice(alphabet) for _ in range(n))


def distribute_lengths(total: int, parts: int) -> List[int]:
    base, rem = divmod(total, parts)
    return [base + (1 if i < rem else 0) for i in range(parts)]


def build_tree(strings: List[str]) -> GeneralizedSuffixTree:
    gst = GeneralizedSuffixTree()
    for s in strings:
        gst.add_string(s)
    return gst


def run_single_case(total_len: int, num_strings: int, alphabet: str, verbose=False) -> Tuple[bool, float, float]:
    lens = distribute_lengths(total_len, num_strings)
    strings = [random_string(m, alphabet) for m in lens]

    # Get current process
    process = psutil.Process(os.getpid())
    mem_before = process.memory_info().rss / 1024 / 1024  # Convert to MB

    start = time.perf_counter()
    gst = build_tree(strings)
    end = time.perf_counter()

    mem_after = process.memory_info().rss / 1024 / 1024  # Convert to MB
    mem_used = mem_after - mem_before

    checker_result = check_answer(strings, gst, verbose=verbose)
    if not checker_result:
        raise ValueError(f"[!] Checker failed on {strings}")

    return checker_result, end - start, mem_used


def run_checker(total_lengths: List[int], repeats: int, alphabet: str, verbose=False) -> List[Tuple]:
    rows = []
    print(f"Running {repeats} trials for each Σ|Tᵢ| …")
    for N in total_lengths:
        results = [
            run_single_case(N, random.choice(NUM_STRINGS_CHOICES), alphabet, verbose) for _ in range(repeats)
        ]
        avg_accuracy = statistics.mean(1 if res else 0 for res, _, _ in results) * 100
        avg_time = statistics.mean(t for _, t, _ in results)
        std_time = statistics.stdev(t for _, t, _ in results) if repeats > 1 else 0.0
        avg_mem = statistics.mean(m for _, _, m in results)
        std_mem = statistics.stdev(m for _, _, m in results) if repeats > 1 else 0.0

        rows.append((N, avg_accuracy, avg_time, std_time, avg_mem, std_mem))
        print(
            f"Σ|Tᵢ|={N:>7}  avg_accuracy={avg_accuracy:.2f}%  avg_time={avg_time:.6f}s  ±σ={std_time:.6f}s  avg_mem={avg_mem:.2f}MB ±σ={std_mem:.2f}MB"
        )
    return rows


def save_csv(rows: List[Tuple], csv_path: Path):
    with csv_path.open("w", encoding="utf-8") as f:
        f.write("total_len,avg_accuracy,avg_time,std_time,avg_mem,std_mem\n")
        for row in rows:
            f.write(",".join(str(v) for v in row) + "\n")
    print(f"CSV saved to {csv_path}")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    total_lengths = [args.base_length * i for i in range(1, args.steps + 1)]
    data = run_checker(total_lengths, args.repeats, args.alphabet, args.verbose)
    save_csv(data, Path(f"random_checker_{args.base_length}_{args.repeats}.csv"))


if __name__ == "__main__":
    main()
