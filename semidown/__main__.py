import argparse
import asyncio
import os
import sys


def read_source(path: str | None) -> str:
    """Read markdown from a file, or from stdin when no path is given."""
    if path is None or path == "-":
        return sys.stdin.read()
    if not os.path.exists(path):
        print(f"Error: File not found: {path}")
        sys.exit(1)
    with open(path, encoding="utf-8") as f:
        return f.read()


def main():
    parser = argparse.ArgumentParser(
        description="Semidown - render markdown incrementally as it streams in"
    )
    parser.add_argument(
        "file", nargs="?", default=None,
        help="Markdown file to stream (default: stdin)",
    )
    parser.add_argument(
        "--html", default=None, metavar="OUT",
        help="Write rendered HTML to OUT instead of the terminal",
    )
    parser.add_argument(
        "--chunk-size", type=int, default=16,
        help="Characters per fragment (default: 16)",
    )
    parser.add_argument(
        "--delay", type=float, default=0.02,
        help="Seconds to wait between fragments (default: 0.02)",
    )
    parser.add_argument(
        "--theme", default="monokai",
        help="Pygments theme for code blocks (default: monokai)",
    )
    parser.add_argument(
        "--skip-empty", action="store_true",
        help="Don't mount blocks that contain only whitespace",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log block lifecycle events to stderr",
    )

    args = parser.parse_args()
    if args.chunk_size <= 0:
        print("Error: --chunk-size must be positive")
        sys.exit(1)

    from semidown.ui.console import configure_logging, console
    configure_logging(args.verbose)

    from semidown.config import SemidownConfig
    config = SemidownConfig(
        mount_empty_blocks=not args.skip_empty,
        renderer="html" if args.html else "rich",
        code_theme=args.theme,
        chunk_size=args.chunk_size,
        delay=args.delay,
    )

    text = read_source(args.file)

    from semidown.app import SemidownApp, build_renderer
    renderer = build_renderer(config)

    if args.html:
        from semidown.mount.html_surface import HtmlSurface
        surface = HtmlSurface()
        app = SemidownApp(renderer, surface, config)
        asyncio.run(app.run(text))
        with open(args.html, "w", encoding="utf-8") as f:
            f.write(surface.html + "\n")
        console.print(f"Wrote {len(surface.block_ids)} blocks to {args.html}", style="banner")
        return

    from semidown.mount.live_surface import LiveSurface
    surface = LiveSurface(console, refresh_per_second=config.refresh_per_second)
    app = SemidownApp(renderer, surface, config)
    try:
        asyncio.run(app.run(text))
    except KeyboardInterrupt:
        print("\n[Stream interrupted.]")
    finally:
        surface.stop()


if __name__ == "__main__":
    main()
