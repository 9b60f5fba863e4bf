"""Command-line interface."""
import sys
import argparse
import logging
import os

from .bounds import compute_all_values_size, compute_exhaustive_size, compute_pairwise_lower_bound, count_pair_requirements
from .errors import CombinationError, InternalInvariantError
from .factory import Strategy, generate_suite, verify_combinations
from .model import ParameterSpace
from .output import format_table, format_csv, format_json, parse_csv_cases, parse_json_cases

STRATEGY_CHOICES = [s.value for s in Strategy]


def _configure_logging(verbose: bool):
    if not verbose:
        return
    logger = logging.getLogger("casegen")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def _load_model(path: str) -> ParameterSpace:
    from . import EXIT_VALIDATION

    if not os.path.exists(path):
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError:
        print(f"Validation error: Model file is not valid UTF-8 text: {path}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except OSError as e:
        print(f"Validation error: Could not read model file: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    try:
        return ParameterSpace.from_model_text(content)
    except ValueError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)


def cmd_generate(args):
    from . import EXIT_SUCCESS, EXIT_VALIDATION, EXIT_GENERATION_ERR, EXIT_VERIF_ERR

    for flag, value in (
        ("--max-params", args.max_params),
        ("--max-values-per-param", args.max_values_per_param),
        ("--max-total-values", args.max_total_values),
        ("--max-cases", args.max_cases),
        ("--max-output-cases", args.max_output_cases),
    ):
        if value < 1:
            print(f"Validation error: {flag} must be >= 1.", file=sys.stderr)
            sys.exit(EXIT_VALIDATION)

    space = _load_model(args.model)
    try:
        space.validate_limits(
            max_params=args.max_params,
            max_values_per_param=args.max_values_per_param,
            max_total_values=args.max_total_values
        )
    except ValueError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    strategy = Strategy(args.strategy)

    if args.dry_run:
        counts = space.get_counts()
        print("Model parsing valid.", file=sys.stderr)
        print(f"Strategy: {strategy.value}", file=sys.stderr)
        if strategy == Strategy.ALL_PAIRS:
            print("Internal parameter order:", file=sys.stderr)
            print("-" * 40, file=sys.stderr)
            print(space.to_model_text(space.get_reordered_parameters()).strip(), file=sys.stderr)
            print("-" * 40, file=sys.stderr)
            print(f"Pair requirements: {count_pair_requirements(counts)}", file=sys.stderr)
            print(f"Lower bound: {compute_pairwise_lower_bound(counts)}", file=sys.stderr)
        elif strategy == Strategy.ALL_VALUES:
            print(f"Would generate: {compute_all_values_size(counts)}", file=sys.stderr)
        else:
            print(f"Would generate: {compute_exhaustive_size(counts)}", file=sys.stderr)
        sys.exit(EXIT_SUCCESS)

    try:
        res = generate_suite(space, strategy, verify=args.verify, max_cases=args.max_cases)
    except InternalInvariantError as e:
        print("Error: Coverage verification failed.", file=sys.stderr)
        for pair in e.missing_pairs[:20]:
            print(f" Missing pair: {pair}", file=sys.stderr)
        sys.exit(EXIT_VERIF_ERR)
    except CombinationError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except Exception as e:
        print(f"Generation error: {str(e) or type(e).__name__}", file=sys.stderr)
        if os.environ.get("CASEGEN_DEBUG") == "1":
            import traceback
            traceback.print_exc()
        sys.exit(EXIT_GENERATION_ERR)

    if args.verify and not res.passed_verification:
        print("Error: Coverage verification failed.", file=sys.stderr)
        for item in res.missing[:20]:
            print(f" Missing: {item}", file=sys.stderr)
        sys.exit(EXIT_VERIF_ERR)

    # Formatting
    n = len(res.rows)
    print_output = True

    if not args.out and args.format != 'json' and n > args.max_output_cases and not args.print_all:
        print(f"Warning: Generated {n} tests exceeding --max-output-cases limit of {args.max_output_cases}.", file=sys.stderr)
        print("To see this output to console, pass --print-all or write to a file using --out FILE", file=sys.stderr)
        print_output = False

    out_str = ""
    if print_output or args.out:
        if args.format == 'table':
            out_str = format_table(res.canonical_headers, res.rows)
        elif args.format == 'csv':
            out_str = format_csv(res.canonical_headers, res.rows)
        elif args.format == 'json':
            out_str = format_json(res.canonical_headers, res.rows, metadata=res.metadata())

    if args.out:
        with open(args.out, "w", encoding="utf-8", newline="") as f:
            f.write(out_str)
            if args.format != 'json':
                f.write('\n')
    elif print_output:
        print(out_str)

    sys.exit(EXIT_SUCCESS)


def cmd_verify(args):
    from . import EXIT_SUCCESS, EXIT_VALIDATION, EXIT_VERIF_ERR

    space = _load_model(args.model)

    if not os.path.exists(args.cases):
        print(f"Error: File not found: {args.cases}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    canonical_headers = space.names
    try:
        with open(args.cases, "r", encoding="utf-8-sig", newline="") as f:
            if args.cases.endswith(".json"):
                rows = parse_json_cases(f, canonical_headers)
            else:
                rows = parse_csv_cases(f, canonical_headers)
    except UnicodeDecodeError:
        print(f"Validation error: Cases file is not valid UTF-8 text: {args.cases}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except OSError as e:
        print(f"Validation error: Could not read cases file: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except ValueError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    try:
        passed, missing = verify_combinations(space, Strategy(args.strategy), rows)
    except ValueError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    if not passed:
        print("Error: Coverage verification failed.", file=sys.stderr)
        for pair in missing[:20]:
            print(f" Missing pair: {pair}", file=sys.stderr)
        sys.exit(EXIT_VERIF_ERR)

    print("Coverage verified successfully.", file=sys.stderr)
    sys.exit(EXIT_SUCCESS)


def cmd_bounds(args):
    from . import EXIT_SUCCESS

    space = _load_model(args.model)
    counts = space.get_counts()
    print(f"Parameter Counts   : {', '.join(str(c) for c in counts)}")
    print(f"All-values         : {compute_all_values_size(counts)}")
    print(f"All-pairs (LB)     : {compute_pairwise_lower_bound(counts)}")
    print(f"All-combinations   : {compute_exhaustive_size(counts)}")
    print(f"Pair Requirements  : {count_pair_requirements(counts)}")
    sys.exit(EXIT_SUCCESS)


def main(argv=None):
    parser = argparse.ArgumentParser(description="casegen: all-values, all-pairs and all-combinations test case generator.")
    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser("generate", help="Generate test cases from a model file")
    gen_parser.add_argument("--model", required=True, help="Path to the model file")
    gen_parser.add_argument("--strategy", choices=STRATEGY_CHOICES, default=Strategy.ALL_PAIRS.value, help="Combination strategy (default: all-pairs)")
    gen_parser.add_argument("--format", choices=["table", "csv", "json"], default="table", help="Output format")
    gen_parser.add_argument("--out", help="Output file (prints to standard output if not provided)")

    # Limits and Boundaries
    gen_parser.add_argument("--max-params", type=int, default=50, help="Maximum number of parameters allowed (default: 50)")
    gen_parser.add_argument("--max-values-per-param", type=int, default=50, help="Maximum number of values per parameter allowed (default: 50)")
    gen_parser.add_argument("--max-total-values", type=int, default=500, help="Maximum total sum of all values allowed (default: 500)")
    gen_parser.add_argument("--max-cases", type=int, default=1000000, help="Maximum number of cases a strategy may generate (default: 1000000)")
    gen_parser.add_argument("--max-output-cases", type=int, default=100000, help="Output block limit on table format prints (default: 100000)")

    # Booleans
    gen_parser.add_argument("--print-all", action="store_true", help="Force print table output even if exceeding max bounds")
    gen_parser.add_argument("--dry-run", action="store_true", help="Parse the model and report planned sizes without generating")
    gen_parser.add_argument("--verify", action="store_true", dest="verify", help="Verify coverage of the generated suite (default)")
    gen_parser.add_argument("--no-verify", action="store_false", dest="verify", help="Skip coverage verification")
    gen_parser.add_argument("--verbose", action="store_true", help="Print engine diagnostics to stderr")
    gen_parser.set_defaults(verify=True)

    ver_parser = subparsers.add_parser("verify", help="Verify coverage of an existing suite")
    ver_parser.add_argument("--model", required=True, help="Path to the model file")
    ver_parser.add_argument("--cases", required=True, help="Path to the cases file (CSV or JSON)")
    ver_parser.add_argument("--strategy", choices=STRATEGY_CHOICES, default=Strategy.ALL_PAIRS.value, help="Coverage guarantee to check (default: all-pairs)")

    bounds_parser = subparsers.add_parser("bounds", help="Print the output size of each strategy")
    bounds_parser.add_argument("--model", required=True, help="Path to the model file")

    subparsers.add_parser("version", help="Print version information")

    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "verify":
        cmd_verify(args)
    elif args.command == "bounds":
        cmd_bounds(args)
    elif args.command == "version":
        from . import __version__
        print(f"casegen {__version__}")
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
