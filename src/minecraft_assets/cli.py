"""Command-line interface for minecraft-assets."""

from __future__ import annotations

import argparse
import fnmatch
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from minecraft_assets.core import AssetPack
from minecraft_assets.resource import MINECRAFT_NAMESPACE, ResourceKind, ResourceLocation
from minecraft_assets.types import ResourceNotFoundError

if TYPE_CHECKING:
    from minecraft_assets.schemas import Model

KIND_CHOICES = {kind.name.lower(): kind for kind in ResourceKind}


def _get_assets(root: str | None) -> AssetPack:
    """Create an asset pack for the root given on the command line.

    Args:
        root: Directory or zip path, or None to use MINECRAFT_ASSETS_ROOT.

    Returns:
        AssetPack instance.
    """
    return AssetPack.at_path(root)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _model_location(args: argparse.Namespace) -> ResourceLocation:
    if args.item:
        return ResourceLocation.item_model(args.name)
    return ResourceLocation.block_model(args.name)


def _load_failed(args: argparse.Namespace, error: Exception) -> int:
    if args.json:
        print(json.dumps({"loaded": False, "error": str(error)}, indent=2))
    else:
        print(f"Cannot load {args.name}", file=sys.stderr)
        print(f"Error: {error}", file=sys.stderr)
    return 2


def _model_summary(model: Model) -> dict[str, Any]:
    return {
        "parent": model.parent,
        "textures": model.textures.to_dict() if model.textures is not None else None,
        "elements": len(model.elements) if model.elements is not None else None,
    }


def cmd_path(args: argparse.Namespace) -> int:
    """Print where a resource's file lives.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    location = ResourceLocation(args.name, KIND_CHOICES[args.kind])

    if args.json:
        output = {
            "identifier": str(location),
            "kind": location.kind.name.lower(),
            "namespace": location.namespace,
            "name": location.name,
            "directory": location.directory,
            "file_path": location.file_path,
            "builtin": location.is_builtin,
        }
        print(json.dumps(output, indent=2))
    else:
        print(location.file_path)

    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List resources of one kind.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    assets = _get_assets(args.root)
    locations = list(assets.enumerate(KIND_CHOICES[args.kind], args.namespace))

    # Apply glob filter if provided
    if args.filter:
        locations = [
            loc for loc in locations if fnmatch.fnmatch(loc.as_str(), args.filter)
        ]

    if args.json:
        output = {
            "resources": [
                {"identifier": loc.as_str(), "file_path": loc.file_path}
                for loc in locations
            ],
            "count": len(locations),
        }
        print(json.dumps(output, indent=2))
    else:
        for location in locations:
            if args.verbose:
                print(f"{location.as_str()} ({location.file_path})")
            else:
                print(location.as_str())

    return 0


def cmd_blockstates(args: argparse.Namespace) -> int:
    """Show the variants or multipart cases of a block.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 if found, 2 if not found or malformed).
    """
    assets = _get_assets(args.root)

    try:
        states = assets.load_blockstates(args.name)
    except (ValueError, OSError) as e:
        return _load_failed(args, e)

    if args.json:
        print(json.dumps(states.model_dump(mode="json", by_alias=True), indent=2))
        return 0

    print(f"Block: {args.name}")
    if states.variants is not None:
        print(f"Variants ({len(states.variants)}):")
        for name, variant in states.variants.items():
            models = ", ".join(m.model for m in variant.models)
            print(f"  {name or '<default>'}: {models}")
    else:
        assert states.multipart is not None
        print(f"Multipart cases ({len(states.multipart)}):")
        for case in states.multipart:
            models = ", ".join(m.model for m in case.apply.models)
            if case.when is None:
                condition = "always"
            else:
                joiner = " OR " if case.when.is_or else ""
                condition = joiner.join(
                    ",".join(f"{k}={v}" for k, v in c.states.items())
                    for c in case.when.conditions
                )
            print(f"  when {condition}: {models}")

    return 0


def cmd_model(args: argparse.Namespace) -> int:
    """Show a model and its parent chain.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 if found, 2 if any model in the chain is missing or malformed).
    """
    assets = _get_assets(args.root)
    location = _model_location(args)

    try:
        if args.item:
            chain = assets.load_item_model_recursive(location.identifier)
        else:
            chain = assets.load_block_model_recursive(location.identifier)
    except (ValueError, OSError) as e:
        return _load_failed(args, e)

    names = [location.as_str()] + [m.parent for m in chain if m.parent is not None]

    if args.json:
        output = {
            "model": location.as_str(),
            "kind": location.kind.name.lower(),
            "chain": [
                {"name": name, **_model_summary(model)}
                for name, model in zip(names, chain)
            ],
        }
        print(json.dumps(output, indent=2))
    else:
        for depth, name in enumerate(names):
            suffix = " (builtin)" if depth == len(chain) else ""
            print(f"{'  ' * depth}{name}{suffix}")

    return 0


def cmd_textures(args: argparse.Namespace) -> int:
    """Show the fully resolved texture variables of a model.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 if found, 2 if any model in the chain is missing or malformed).
    """
    assets = _get_assets(args.root)
    location = _model_location(args)

    try:
        if args.item:
            textures = assets.resolve_item_model_textures(location.identifier)
        else:
            textures = assets.resolve_block_model_textures(location.identifier)
    except (ValueError, OSError) as e:
        return _load_failed(args, e)

    if args.json:
        print(json.dumps({"model": location.as_str(), "textures": textures.to_dict()}, indent=2))
    else:
        for name in sorted(textures):
            texture = textures[name]
            marker = "  (unresolved)" if texture.reference is not None else ""
            print(f"{name}: {texture.value}{marker}")

    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Render one frame of a texture to a PNG file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 if rendered, 2 if the texture is missing, 1 on error).
    """
    from minecraft_assets.render import render_texture

    assets = _get_assets(args.root)

    try:
        texture = assets.load_texture(args.name)
    except (ValueError, OSError) as e:
        return _load_failed(args, e)

    try:
        meta = assets.load_texture_meta(args.name)
    except ResourceNotFoundError:
        # most textures have no .mcmeta
        meta = None

    rendered = render_texture(texture, meta=meta, frame=args.frame, scale=args.scale)

    if args.output == "-":
        sys.stdout.buffer.write(rendered.data)
        return 0

    output_path = Path(args.output)
    output_path.write_bytes(rendered.data)
    if args.json:
        print(json.dumps({"output": str(output_path), **(rendered.metadata or {})}, indent=2))
    else:
        print(f"Saved to: {output_path}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="minecraft-assets",
        description="Locate, load and resolve Minecraft asset files",
    )
    parser.add_argument(
        "--root",
        type=str,
        help="Asset directory or resource pack zip (default: $MINECRAFT_ASSETS_ROOT or cwd)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show more detail and debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # path command
    path_parser = subparsers.add_parser("path", help="Show the file path of a resource")
    path_parser.add_argument("kind", choices=sorted(KIND_CHOICES))
    path_parser.add_argument("name", help="Resource identifier (optionally namespaced)")

    # list command
    list_parser = subparsers.add_parser("list", help="List resources of one kind")
    list_parser.add_argument("kind", choices=sorted(KIND_CHOICES))
    list_parser.add_argument(
        "--namespace",
        type=str,
        default=MINECRAFT_NAMESPACE,
        help=f"Namespace to list (default: {MINECRAFT_NAMESPACE})",
    )
    list_parser.add_argument(
        "--filter",
        type=str,
        help="Glob pattern to filter identifiers (e.g., 'block/oak_*')",
    )

    # blockstates command
    states_parser = subparsers.add_parser("blockstates", help="Show a block's states")
    states_parser.add_argument("name", help="Block identifier")

    # model and textures commands
    for command, help_text in (
        ("model", "Show a model's parent chain"),
        ("textures", "Show a model's resolved texture variables"),
    ):
        model_parser = subparsers.add_parser(command, help=help_text)
        model_parser.add_argument("name", help="Model identifier (e.g. block/cube_all)")
        model_parser.add_argument(
            "--item",
            action="store_true",
            help="Treat the identifier as an item model",
        )

    # render command
    render_parser = subparsers.add_parser("render", help="Render a texture frame to PNG")
    render_parser.add_argument("name", help="Texture path (e.g. block/stone)")
    render_parser.add_argument(
        "-o",
        "--output",
        type=str,
        required=True,
        help="Output destination: '-' for stdout, or file path to save",
    )
    render_parser.add_argument("--frame", type=int, default=0, help="Animation frame")
    render_parser.add_argument("--scale", type=int, help="Integer upscale factor")

    try:
        args = parser.parse_args(argv)
    except SystemExit:
        # argparse raises SystemExit(2) for invalid commands/arguments
        return 1

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args.verbose)

    commands = {
        "path": cmd_path,
        "list": cmd_list,
        "blockstates": cmd_blockstates,
        "model": cmd_model,
        "textures": cmd_textures,
        "render": cmd_render,
    }

    try:
        return commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        if args.json:
            print(json.dumps({"error": str(e)}, indent=2))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
