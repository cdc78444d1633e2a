"""Command line entry point: fill an array with random values and sort it in parallel."""

from __future__ import annotations

import getopt
import random
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from parsort.arrayutils import find_disorder, print_array
from parsort.worker import parallel_sort

PROG = "parallel_sort"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CliError(ValueError):
    """Raised when the command line cannot be used."""


@dataclass(frozen=True)
class Options:
    """Validated command line settings."""

    elements: int
    workers: int


def _leading_int(text: str) -> int:
    """Parse the leading integer of ``text`` the lenient way, yielding 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def is_power_of_two(p: int) -> bool:
    """Whether ``p`` is a positive power of two (1 counts as 2**0)."""
    return p > 0 and p & (p - 1) == 0


def parse_args(argv: Sequence[str]) -> Options:
    """Read ``-n <elements>`` and ``-w <workers>`` from ``argv`` (without the program name).

    Raises :class:`CliError` for unknown options, missing or non-positive
    values, and a worker count that is not a power of two.
    """
    try:
        opts, _ = getopt.getopt(list(argv), "n:w:")
    except getopt.GetoptError as exc:
        raise CliError(f"Uso: {PROG} -n <num_elementi> -w <num_worker>") from exc

    n = 0
    p = 0
    for flag, value in opts:
        if flag == "-n":
            n = _leading_int(value)
        else:
            p = _leading_int(value)

    if n <= 0 or p <= 0:
        raise CliError(
            "Errore: Specificare -n <num_elementi> (positivo) e -w <num_worker> (positivo)."
        )
    if not is_power_of_two(p):
        raise CliError(
            f"ERRORE: Il numero di worker P={p} (da opzione -w) non è una potenza di 2.\n"
            "         Per questo algoritmo, P deve essere una potenza di 2 (es. 1, 2, 4, 8, ...)."
        )
    return Options(n, p)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the program and return its exit status."""
    args = sys.argv[1:] if argv is None else argv
    try:
        options = parse_args(args)
    except CliError as exc:
        print(exc, file=sys.stderr)
        sys.stderr.flush()
        return 1

    n, p = options.elements, options.workers
    out = sys.stdout
    print(f"Avvio parallel_sort con N={n} elementi e P={p} worker (da -w).", file=out)

    print("Inizializzazione array con valori casuali...", file=out)
    upper = n * 10
    values = [random.randrange(upper) for _ in range(n)]
    print_array("Array Iniziale", values, out)

    print(f"Creazione di {p} thread worker (da -w)...", file=out)
    print("Attesa terminazione thread (join)...", file=out)
    out.flush()
    result = parallel_sort(values, p, out)
    print("Tutti i thread hanno terminato.", file=out)

    print_array("Array Finale", result, out)

    index = find_disorder(result)
    if index is None:
        print("Verifica: L'array è ordinato correttamente.", file=out)
    else:
        print(
            f"ERRORE: l'array NON è ordinato! array[{index}]={result[index]} > "
            f"array[{index + 1}]={result[index + 1]}",
            file=sys.stderr,
        )
        print("Verifica: ERRORE, l'array NON è ordinato!", file=out)

    print("Pulizia risorse...", file=out)
    print("Esecuzione terminata con successo.", file=out)
    out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())