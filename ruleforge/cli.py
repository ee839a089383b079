"""
RuleForge CLI - Command-line interface for the rule engine.

Usage:
    ruleforge games                          List built-in rule packs
    ruleforge rules <game> [--category C]    List the rules of a game
    ruleforge validate <config.json>         Validate an exported configuration
    ruleforge new <game> [--name N] [-o F]   Export a fresh configuration
    ruleforge mod <config.json> [-o F]       Turn a configuration into a modification
    ruleforge apply <mod.json> [-o F]        Apply a modification, export the result
    ruleforge serve [--host H] [--port P]     Run the HTTP API (needs the api extra)

Every command except serve runs against a fresh engine with the built-in rule packs
installed; nothing is kept between invocations.
"""

import argparse
import os
import sys

from .utils import setup_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="RuleForge - Game rule configuration engine",
        prog="ruleforge",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("RULEFORGE_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Games command
    subparsers.add_parser("games", help="List built-in rule packs")

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="List the rules of a game")
    rules_parser.add_argument("game", help="Game type, e.g. chess")
    rules_parser.add_argument("--category", help="Only rules in this category")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a configuration file")
    validate_parser.add_argument("config_file", help="Path to exported configuration JSON")

    # New command
    new_parser = subparsers.add_parser("new", help="Create and export a configuration")
    new_parser.add_argument("game", help="Game type, e.g. chess")
    new_parser.add_argument("--name", help="Configuration name")
    new_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    # Mod command
    mod_parser = subparsers.add_parser("mod", help="Create a modification from a configuration")
    mod_parser.add_argument("config_file", help="Path to exported configuration JSON")
    mod_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    # Apply command
    apply_parser = subparsers.add_parser("apply", help="Apply a modification")
    apply_parser.add_argument("mod_file", help="Path to modification JSON")
    apply_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "games":
        cmd_games(args)
    elif args.command == "rules":
        cmd_rules(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "new":
        cmd_new(args)
    elif args.command == "mod":
        cmd_mod(args)
    elif args.command == "apply":
        cmd_apply(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _build_engine():
    from .engine_core import GameRuleEngine
    from .games import install_builtin_rules

    engine = GameRuleEngine()
    install_builtin_rules(engine)
    return engine


def _read(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {path}")
        sys.exit(1)


def _write(text, path):
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"Wrote {path}")
    else:
        print(text)


def _import_or_exit(engine, text):
    from .sharing import ConfigurationParseError

    try:
        return engine.import_configuration(text)
    except ConfigurationParseError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_games(args):
    """List built-in rule packs."""
    from .games import BUILTIN_RULE_PACKS

    for name, rules in BUILTIN_RULE_PACKS.items():
        print(f"{name}: {len(rules)} rules")


def cmd_rules(args):
    """List the rules of a game."""
    engine = _build_engine()
    if args.category:
        rules = engine.get_rules_by_category(args.game, args.category)
    else:
        rules = engine.get_rules_for_game(args.game)

    if not rules:
        print(f"No rules found for {args.game}")
        sys.exit(1)

    for rule in rules:
        marker = "*" if rule.is_default else " "
        print(f"{marker} {rule.id} [{rule.category.value}] {rule.name}")
        for dependency in rule.dependencies:
            print(f"      requires {dependency}")
        for conflict in rule.conflicts:
            print(f"      conflicts with {conflict}")


def cmd_validate(args):
    """Validate an exported configuration."""
    engine = _build_engine()
    config_id = _import_or_exit(engine, _read(args.config_file))
    config = engine.get_configuration(config_id)
    result = engine.validate_configuration(config_id)

    print(f"Configuration: {config.name} ({config.base_game})")
    print(f"Active rules: {len(config.active_rules)}")
    print(f"Valid: {'yes' if result.valid else 'no'}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors:
            print(f"  - {e}")

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.suggestions:
        print("\nSuggestions:")
        for s in result.suggestions:
            print(f"  - {s}")

    if not result.valid:
        sys.exit(1)


def cmd_new(args):
    """Create a configuration with the game's default rules and export it."""
    engine = _build_engine()
    if not engine.get_rules_for_game(args.game):
        print(f"Error: Unknown game: {args.game}")
        sys.exit(1)

    name = args.name or f"Custom {args.game}"
    config = engine.create_configuration(args.game, name)
    _write(engine.export_configuration(config.game_id), args.output)


def cmd_mod(args):
    """Turn an exported configuration into a modification."""
    engine = _build_engine()
    config_id = _import_or_exit(engine, _read(args.config_file))
    mod = engine.create_game_modification(config_id)
    _write(engine.export_modification(mod), args.output)


def cmd_apply(args):
    """Apply a modification and export the resulting configuration."""
    from .sharing import ConfigurationParseError

    engine = _build_engine()
    try:
        mod = engine.import_modification(_read(args.mod_file))
    except ConfigurationParseError as e:
        print(f"Error: {e}")
        sys.exit(1)

    config_id = engine.apply_game_modification(mod)
    _write(engine.export_configuration(config_id), args.output)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install ruleforge[api]")
        sys.exit(1)

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
