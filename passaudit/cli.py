"""CLI for PassAudit — score, batch, comply, generate."""

import argparse
import logging
import sys

from rich import print, print_json
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .batch import analyze_batch, parse_password_lines
from .compliance import STANDARDS, check_compliance
from .config import engine_config_from_settings, load_config
from .evaluator import PasswordStrengthEngine, Strength
from .generator import generate_many
from .log import setup_logging
from .storage import export_csv, export_json
from .suggestions import describe_issue, suggest_improvements

logger = logging.getLogger(__name__)

STRENGTH_COLORS = {
    Strength.VERY_WEAK: "red",
    Strength.WEAK: "dark_orange",
    Strength.MODERATE: "yellow",
    Strength.STRONG: "green",
    Strength.VERY_STRONG: "bold green",
}


def build_engine(args) -> PasswordStrengthEngine:
    settings = load_config(args.config)
    if args.guess_rate is not None:
        settings["guess_rate"] = args.guess_rate
    return PasswordStrengthEngine(engine_config_from_settings(settings))


def cmd_score(args, engine):
    result = engine.evaluate(args.password)
    if args.json:
        print_json(data=result.to_dict())
        return
    color = STRENGTH_COLORS[result.strength]
    header = f"Score: {result.score} / 100 — [{color}]{result.strength.label}[/{color}]"
    body = (
        f"Estimated entropy: {result.entropy_bits:.1f} bits\n"
        f"Estimated crack time: {result.crack_time}\n"
        f"Length: {result.profile.length}"
    )
    print(Panel(body, title=header))
    print("[bold]Suggestions:[/bold]")
    for issue in result.issues:
        print(f" • {describe_issue(issue)}")
    sugg = suggest_improvements(args.password, engine=engine)
    if sugg["examples"]:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Example stronger password")
        for ex in sugg["examples"]:
            table.add_row(escape(ex))
        print(table)


def cmd_batch(args, engine):
    with open(args.file, "r", encoding="utf-8") as f:
        passwords = parse_password_lines(f.read())
    if not passwords:
        raise ValueError(f"No passwords found in {args.file}")
    report = analyze_batch(passwords, engine=engine, workers=args.workers)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", width=5)
    table.add_column("Password")
    table.add_column("Score", justify="right")
    table.add_column("Strength")
    table.add_column("Entropy", justify="right")
    table.add_column("Top issues")
    for item in report.items:
        r = item.result
        color = STRENGTH_COLORS[r.strength]
        table.add_row(
            str(item.index),
            escape(item.masked),
            str(r.score),
            f"[{color}]{r.strength.label}[/{color}]",
            f"{r.entropy_bits:.1f}",
            ", ".join(i.value for i in r.issues[:3]),
        )
    print(table)

    s = report.summary()
    counts = " · ".join(f"{Strength[k.upper()].label}: {v}" for k, v in s["by_strength"].items())
    print(Panel(
        f"{counts}\nAverage score: {s['average_score']}   Average entropy: {s['average_entropy']} bits",
        title=f"Processed {s['analyzed']} passwords",
    ))
    if args.csv:
        print(f"[green]Exported CSV to:[/green] {export_csv(report, args.csv)}")
    if args.json_out:
        print(f"[green]Exported JSON to:[/green] {export_json(report, args.json_out)}")


def cmd_comply(args, engine):
    report = check_compliance(args.password, standards=args.standard, engine=engine)
    for std in report["standards"].values():
        table = Table(title=f"{std['name']} — {std['score']}%", show_header=True, header_style="bold")
        table.add_column("Status", width=8)
        table.add_column("Requirement")
        table.add_column("Description")
        for c in std["checks"]:
            status = {"pass": "[green]PASS[/green]", "fail": "[red]FAIL[/red]"}.get(c["status"], "[dim]MANUAL[/dim]")
            table.add_row(status, c["requirement"], c["description"])
        print(table)
    print(f"[bold]Average compliance score:[/bold] {report['overall_score']}%")


def cmd_generate(args, engine):
    passwords = generate_many(
        args.copies,
        length=args.length,
        use_symbols=not args.no_symbols,
        use_upper=not args.no_upper,
        use_lower=not args.no_lower,
        use_digits=not args.no_digits,
        exclude_similar=args.exclude_similar,
        exclude_ambiguous=args.exclude_ambiguous,
    )
    for i, pw in enumerate(passwords):
        print(f"[bold green]Password #{i+1}:[/bold green] {escape(pw)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="passaudit")
    parser.add_argument("--config", type=str, help="Path to settings JSON (default: user config dir)")
    parser.add_argument("--guess-rate", type=float, help="Attacker guesses per second (default 1e11)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sc = sub.add_parser("score", help="Score a password and show suggestions")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.add_argument("--json", action="store_true", help="Print the raw result as JSON")
    sc.set_defaults(func=cmd_score)

    ba = sub.add_parser("batch", help="Score a file of passwords, one per line")
    ba.add_argument("file", type=str, help="Input file")
    ba.add_argument("--csv", type=str, help="Write results to this CSV file")
    ba.add_argument("--json", dest="json_out", type=str, help="Write results to this JSON file")
    ba.add_argument("--workers", type=int, default=None, help="Worker threads")
    ba.set_defaults(func=cmd_batch)

    co = sub.add_parser("comply", help="Check a password against compliance standards")
    co.add_argument("password", type=str, help="Password to check")
    co.add_argument("--standard", "-s", action="append", choices=sorted(STANDARDS), help="Limit to a standard (repeatable)")
    co.set_defaults(func=cmd_comply)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    gen.add_argument("--length", type=int, default=16, help="Password length")
    gen.add_argument("--no-symbols", action="store_true", help="Disable symbols")
    gen.add_argument("--no-upper", action="store_true", help="Disable uppercase")
    gen.add_argument("--no-lower", action="store_true", help="Disable lowercase")
    gen.add_argument("--no-digits", action="store_true", help="Disable digits")
    gen.add_argument("--exclude-similar", action="store_true", help="Skip look-alike characters (il1Lo0O)")
    gen.add_argument("--exclude-ambiguous", action="store_true", help="Skip brackets, quotes and punctuation")
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.set_defaults(func=cmd_generate)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        engine = build_engine(args)
        args.func(args, engine)
    except (ValueError, OSError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
