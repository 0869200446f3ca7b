import argparse
import os
import sys
import webbrowser
from threading import Timer


def open_browser(port: int):
    """Open the browser after a short delay."""
    webbrowser.open(f'http://localhost:{port}')


def main():
    parser = argparse.ArgumentParser(description='Run Survey Responses Web UI')
    parser.add_argument('--port', type=int, default=3000, help='Port to run on (default: 3000)')
    parser.add_argument('--storage', choices=['file', 'sqlite'], help='Response store backend')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--no-browser', action='store_true', help='Don\'t open browser automatically')
    args = parser.parse_args()

    # Settings.from_env() picks these up
    if args.debug:
        os.environ['FLASK_DEBUG'] = 'true'
    if args.storage:
        os.environ['SURVEY_STORAGE'] = args.storage
    os.environ['PORT'] = str(args.port)

    if not args.no_browser:
        Timer(1.5, open_browser, [args.port]).start()

    sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))
    from survey_responses.main import run_cli

    sys.argv = [sys.argv[0], 'serve']
    run_cli()


if __name__ == '__main__':
    main()
