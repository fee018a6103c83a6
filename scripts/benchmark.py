#!/usr/bin/env python3
"""
Benchmark script for simlsh fingerprint throughput.

Fingerprints a synthetic corpus with several digest algorithms and
aggregation batch sizes, and checks that every batch size gives the same
fingerprints.
"""

import random
import time
from typing import List

import click

from simlsh import FingerprintConfig, Fingerprinter


def generate_corpus(num_docs: int, words_per_doc: int, seed: int = 42) -> List[str]:
    """Generate random documents over a fixed vocabulary."""
    rng = random.Random(seed)
    vocabulary = [f"word{i}" for i in range(5000)]
    return [
        " ".join(rng.choice(vocabulary) for _ in range(words_per_doc))
        for _ in range(num_docs)
    ]


@click.command()
@click.option('--num-docs', default=200, help='Number of documents to generate')
@click.option('--words-per-doc', default=1000, help='Words per document')
@click.option('--digest', 'digests', multiple=True, default=['md5', 'sha1', 'sha256'],
              help='Digest algorithms to compare')
@click.option('--batch-size', 'batch_sizes', multiple=True, type=int, default=[1, 64, 1024],
              help='Aggregation batch sizes to compare')
@click.option('--width', default=3, help='Shingle width')
def benchmark(num_docs, words_per_doc, digests, batch_sizes, width):
    """Run throughput benchmark on a synthetic corpus."""

    click.echo("simlsh fingerprint benchmark")
    click.echo("=" * 50)

    start_time = time.time()
    corpus = generate_corpus(num_docs, words_per_doc)
    click.echo(f"Generated {num_docs} documents x {words_per_doc} words "
               f"in {time.time() - start_time:.2f}s")

    total_shingles = num_docs * max(0, words_per_doc - width + 1)

    for digest in digests:
        reference = None
        for batch_size in batch_sizes:
            config = FingerprintConfig(shingle_width=width, digest=digest, batch_size=batch_size)
            fingerprinter = Fingerprinter.from_config(config)

            start_time = time.time()
            results = list(fingerprinter.fingerprint_many(corpus))
            elapsed = time.time() - start_time

            if reference is None:
                reference = results
            elif results != reference:
                raise click.ClickException(
                    f"{digest}: batch size {batch_size} changed the fingerprints"
                )

            click.echo(
                f"  - {digest:>7} ({fingerprinter.digest_bits:>3} bits) batch={batch_size:<5} "
                f"{elapsed:.2f}s  {total_shingles / max(elapsed, 1e-9):,.0f} shingles/s"
            )

    click.echo("\nBenchmark complete!")


if __name__ == '__main__':
    benchmark()
