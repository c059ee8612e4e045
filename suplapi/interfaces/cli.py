import argparse
import json
import sys
from datetime import datetime
from typing import List, Optional

from suplapi.application.client import SuplAPI
from suplapi.crosscutting.config import LOG_LEVELS, ConfigError, Settings, load_settings
from suplapi.crosscutting.logging import CorrelationContext, get_logger, setup_logging
from suplapi.domain.entities import Playlist
from suplapi.domain.errors import SuplAPIError
from suplapi.infrastructure.transports.requests_transport import RequestsHttpClient


class CLI:
    """Command Line Interface for suplapi."""

    def __init__(self, stdout=None):
        """Initialize CLI."""
        # Do not auto-load .env to keep tests deterministic
        self.parser = self._create_parser()
        self.stdout = stdout or sys.stdout

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser."""
        parser = argparse.ArgumentParser(
            prog='suplapi',
            description='Query the Supla radio playlist API'
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        playlist_parser = subparsers.add_parser('playlist', help='Show recently played tracks of a channel')
        playlist_parser.add_argument(
            '--channel',
            type=int,
            required=True,
            help='Channel id (e.g. 70 for Groove FM)'
        )
        playlist_parser.add_argument(
            '--limit',
            type=int,
            default=20,
            help='Tracks per page (default: 20)'
        )
        playlist_parser.add_argument(
            '--next-token',
            type=int,
            default=None,
            help='Continuation token of a previous page'
        )
        playlist_parser.add_argument(
            '--pages',
            type=int,
            default=1,
            help='Number of pages to fetch, following next_token (default: 1)'
        )
        playlist_parser.add_argument(
            '--json',
            action='store_true',
            help='Print each page as a JSON document'
        )
        playlist_parser.add_argument(
            '--log-level',
            choices=LOG_LEVELS,
            default=None,
            help='Set logging level (default from SUPLAPI_LOG_LEVEL or WARNING)'
        )
        playlist_parser.add_argument(
            '--env-file',
            default=None,
            help='Read SUPLAPI_* settings from this .env file'
        )

        return parser

    def _validate_arguments(self, args: argparse.Namespace) -> None:
        """Validate command line arguments."""
        if getattr(args, 'pages', 1) < 1:
            raise ValueError("--pages must be at least 1")

    def _create_request_id(self) -> str:
        """Create identifier correlating the log lines of one invocation."""
        return f"suplapi_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"

    def _create_api(self, settings: Settings) -> SuplAPI:
        """Create the API client from settings."""
        return SuplAPI(RequestsHttpClient(timeout=settings.timeout), base_url=settings.base_url)

    def _print_playlist(self, playlist: Playlist, as_json: bool) -> None:
        if as_json:
            print(json.dumps(playlist.to_dict(), ensure_ascii=False), file=self.stdout)
            return
        for track in playlist.items:
            print(f"{track.date}  {track.artist} - {track.song}", file=self.stdout)
        print(f"next_token: {playlist.next_token}", file=self.stdout)

    def _show_playlist(self, args: argparse.Namespace, settings: Settings) -> None:
        """Fetch and print playlist pages."""
        logger = get_logger(__name__)
        api = self._create_api(settings)
        try:
            next_token = args.next_token
            for page in range(args.pages):
                playlist = api.playlist(args.channel, args.limit, next_token)
                self._print_playlist(playlist, args.json)
                if not playlist.items:
                    logger.info(f"Empty page after {page + 1} page(s), stopping")
                    break
                next_token = playlist.next_token
        finally:
            api.client.close()

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI and return the exit status."""
        args = self.parser.parse_args(argv)

        if not args.command:
            self.parser.print_help()
            return 1

        logger = get_logger(__name__)
        try:
            settings = load_settings(env_file=args.env_file)
            setup_logging(args.log_level or settings.log_level)
            self._validate_arguments(args)

            if args.command == 'playlist':
                with CorrelationContext(request_id=self._create_request_id()):
                    self._show_playlist(args, settings)
            return 0

        except KeyboardInterrupt:
            logger.warning("Operation cancelled by user")
            return 130
        except (SuplAPIError, ConfigError, ValueError) as e:
            logger.error(f"CLI error: {e}")
            return 1


def main():
    """Main entry point."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
