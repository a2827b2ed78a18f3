from __future__ import annotations

import argparse
import gc
import logging
import os
import random
import statistics
import time
import tracemalloc
from pathlib import Path
from typing import List, Tuple

import matplotlib.pyplot as plt
import psutil

from naive_gst.random_checker import build_tree, distribute_lengths
from naive_gst.suffix_tree import GeneralizedSuffixTree

# Experiment parameters


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark naive generalized suffix tree construction.")
    parser.add_argument(
        "--base_length",
        "-b",
        type=int,
        default=200,
        help="Base length for total lengths (default: 200).",
    )
    parser.add_argument(
        "--steps",
        "-s",
        type=int,
        default=20,
        help="Number of total lengths to try, as multiples of the base length (default: 20).",
    )
    parser.add_argument(
        "--repeats",
        "-r",
        type=int,
        default=10,
        help="Number of independent trials per total length (default: 10).",
    )
    parser.add_argument(
        "--p",
        "-p",
        type=float,
        default=0.0,
        help="Probability of generating a string with only 'A's (default: 0.0).",
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        help="Only write the CSV.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output for debugging.",
    )
    return parser.parse_args(argv)


NUM_STRINGS_CHOICES: List[int] = [2, 3, 4, 5, 6, 7, 8, 9]
ALPHABET: str = "ACGT"
this_file_name = Path(__file__).name.replace(".py", "")

###############################################################################
# Helper functions                                                            #
###############################################################################


def random_dna(n: int, p: float = 0.0) -> str:
    # a run of 'A's is the worst case: every suffix walks the longest path
    if random.random() < p:
        return "A" * n
    return "".join(random.choice(ALPHABET) for _ in range(n))


def run_single_case(total_len: int, num_strings: int, p: float) -> Tuple[float, float, int]:
    lens = distribute_lengths(total_len, num_strings)
    strings = [random_dna(m, p) for m in lens]

    gc.collect()

    tracemalloc.start()
    start = time.perf_counter()

    gst: GeneralizedSuffixTree = build_tree(strings)

    end_time = time.perf_counter()
    run_time = end_time - start
    _, peak_memory = tracemalloc.get_traced_memory()  # peak memory in bytes
    tracemalloc.stop()

    mem_used = peak_memory / (1024 * 1024)  # Convert to MB

    return run_time, mem_used, gst.count_nodes()


def run_benchmark(total_lengths: List[int], repeats: int, p: float) -> List[Tuple]:
    rows = []
    print(f"Running {repeats} trials for each Σ|Tᵢ| …")
    for N in total_lengths:
        results = [run_single_case(N, random.choice(NUM_STRINGS_CHOICES), p) for _ in range(repeats)]
        times = [result[0] for result in results]
        mems = [result[1] for result in results]
        avg_time = statistics.mean(times)
        std_time = statistics.stdev(times) if repeats > 1 else 0.0
        avg_mem = statistics.mean(mems)
        std_mem = statistics.stdev(mems) if repeats > 1 else 0.0
        avg_nodes = statistics.mean(result[2] for result in results)

        rows.append((N, avg_time, std_time, avg_mem, std_mem, avg_nodes))
        print(
            f"Σ|Tᵢ|={N:>7}  avg={avg_time:.6f}s  ±σ={std_time:.6f}s  avg_mem={avg_mem:.2f}MB  ±σ={std_mem:.2f}MB  nodes={avg_nodes:.1f}"
        )
    return rows


def save_csv(rows: List[Tuple], csv_path: Path):
    with csv_path.open("w", encoding="utf-8") as f:
        f.write("total_len,avg_time,std_time,avg_mem,std_mem,avg_nodes\n")
        for row in rows:
            f.write(",".join(str(v) for v in row) + "\n")
    print(f"CSV saved to {csv_path}")


def plot(xs, avgs, stds, save_file_name, xlabel="Total length Σ|Tᵢ|", ylabel="Runtime (s)", file_name_suffix=""):
    fig, ax = plt.subplots(figsize=(10, 5))
    plt.rcParams.update({"font.size": 14})

    ax.plot(xs, avgs, marker="o", linewidth=2)
    lower = [a - s for a, s in zip(avgs, stds)]
    upper = [a + s for a, s in zip(avgs, stds)]
    ax.fill_between(xs, lower, upper, alpha=0.25)

    ax.set_xlabel(xlabel, fontsize=14)
    ax.set_ylabel(ylabel, fontsize=14)
    ax.grid(True, which="both", linestyle=":", alpha=0.6)
    fig.tight_layout()
    out = f"{save_file_name}_{file_name_suffix}.png"
    fig.savefig(out, dpi=300)
    plt.close(fig)
    print(f"Plot saved: {out}")
    return out


###############################################################################
# Entry‐point                                                                 #
###############################################################################


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    process = psutil.Process(os.getpid())
    print(f"RSS before: {process.memory_info().rss / 1024 / 1024:.2f}MB")

    total_lengths = [args.base_length * i for i in range(1, args.steps + 1)]
    save_file_name = f"{this_file_name}_B_{args.base_length}_R_{args.repeats}_p_{args.p}"

    data = run_benchmark(total_lengths, args.repeats, args.p)
    save_csv(data, Path(f"{save_file_name}.csv"))
    if args.no_plot:
        return
    plot(
        [row[0] for row in data],
        [row[1] for row in data],
        [row[2] for row in data],
        save_file_name,
        file_name_suffix="runtime",
    )
    plot(
        [row[0] for row in data],
        [row[3] for row in data],
        [row[4] for row in data],
        save_file_name,
        ylabel="Memory usage (MB)",
        file_name_suffix="memory",
    )


if __name__ == "__main__":
    main()
