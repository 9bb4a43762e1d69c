import argparse
import json
import sys

from .config import load_settings
from .logging_utils import configure_logging
from .server import serve
from .service import EmbedService


def build_parser():
    p = argparse.ArgumentParser(prog="embedgen", description="TikTok to Discord embed service")
    p.add_argument("--strategy", choices=("static", "rendered", "snaptik"))
    p.add_argument("--layout", choices=("stats", "creator"))
    p.add_argument("--allow-youtube", action="store_true", default=None)
    p.add_argument("--log-level")
    sub = p.add_subparsers(dest="command", required=True)

    serve_p = sub.add_parser("serve", help="Run the HTTP server")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)

    embed_p = sub.add_parser("embed", help="Print the embed JSON for one URL")
    embed_p.add_argument("url")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = load_settings(
        strategy=args.strategy,
        layout=args.layout,
        allow_youtube=args.allow_youtube,
        log_level=args.log_level,
        host=getattr(args, "host", None),
        port=getattr(args, "port", None),
    )
    configure_logging(settings)

    if args.command == "serve":
        serve(settings)
        return 0

    response = EmbedService(settings).handle(args.url)
    print(json.dumps(response.body, indent=2, ensure_ascii=False))
    return 0 if response.status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
