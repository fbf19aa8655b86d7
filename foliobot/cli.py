"""CLI interface for foliobot: the chat widget in a terminal"""

import sys
import time
import threading
import argparse
import logging
import textwrap
from colorama import init, Fore, Style

from . import config
from . import __version__, __author__, __powered_by__
from .builtin_knowledge import default_keyword_responses, default_knowledge_base
from .knowledge import KnowledgeBaseError, load_knowledge_base
from .widget import ChatWidget, Renderer

# Initialize colorama for Windows support
init(autoreset=True)

logger = logging.getLogger(__name__)


# ── Typewriter helper ────────────────────────────────────────────────────────
def _typewrite(text: str, color: str = Fore.WHITE, delay: float = 0.013, end: str = '\n'):
    """Print text with a typewriter effect, one character at a time."""
    if delay <= 0:
        sys.stdout.write(color + text + Style.RESET_ALL + end)
        sys.stdout.flush()
        return
    if len(text) > 200:
        delay = 0.005
    sys.stdout.write(color)
    sys.stdout.flush()
    for ch in text:
        sys.stdout.write(ch)
        sys.stdout.flush()
        time.sleep(delay)
    sys.stdout.write(Style.RESET_ALL + end)
    sys.stdout.flush()


# ── Spinner ──────────────────────────────────────────────────────────────────
class _Spinner:
    """Animated dots shown while the bot is composing a reply."""
    _FRAMES = ('.  ', '.. ', '...')

    def __init__(self, message: str, color: str = Fore.YELLOW):
        self.message = message
        self.color   = color
        self._stop   = threading.Event()
        self._thread = threading.Thread(target=self._spin, daemon=True)

    def _spin(self):
        i = 0
        while not self._stop.is_set():
            frame = self._FRAMES[i % len(self._FRAMES)]
            sys.stdout.write(f"\r{self.color}  {self.message}{frame}{Style.RESET_ALL}")
            sys.stdout.flush()
            time.sleep(0.1)
            i += 1

    def start(self):
        self._thread.start()
        return self

    def stop(self):
        self._stop.set()
        self._thread.join()
        sys.stdout.write('\r' + ' ' * (len(self.message) + 8) + '\r')
        sys.stdout.flush()

    def __enter__(self):
        return self.start()

    def __exit__(self, *_):
        self.stop()


class TerminalRenderer(Renderer):
    """
    Draws the transcript on stdout.
    render() may be called from the reply timer thread, so it only records
    the transcript; flush() prints bot entries not shown yet.
    """

    def __init__(self, typing_delay: float = 0.013, width: int = config.CLI_WIDTH):
        self.typing_delay = typing_delay
        self.width = width
        self.handler = None
        self._lock = threading.Lock()
        self._transcript = ()
        self._shown = 0
        self.visible = None

    def render(self, transcript):
        with self._lock:
            self._transcript = tuple(transcript)
            if len(self._transcript) < self._shown:
                self._shown = 0  # transcript was cleared

    def on_submit(self, handler):
        self.handler = handler

    def set_visible(self, visible):
        if self.visible is not None and visible != self.visible:
            state = "opened" if visible else "closed"
            print(f"{Fore.CYAN}  (chat {state}){Style.RESET_ALL}")
        self.visible = visible

    def submit(self, text: str) -> bool:
        if self.handler is None:
            return False
        return self.handler(text)

    def flush(self):
        with self._lock:
            pending = self._transcript[self._shown:]
            self._shown = len(self._transcript)
        for entry in pending:
            if not entry.from_user:
                self.print_bot(entry.text)

    def print_bot(self, text: str):
        sep = f"{Fore.GREEN}{'─' * self.width}{Style.RESET_ALL}"
        print(f"\n{Fore.GREEN + Style.BRIGHT}  {config.CLI_ASSISTANT}{Style.RESET_ALL}")
        print(sep)
        for line in textwrap.wrap(text, width=self.width - 2) or ['']:
            _typewrite(f"  {line}", Fore.WHITE, delay=self.typing_delay)
        print(f"{sep}\n")


class FolioBotCLI:
    """Interactive CLI around a single ChatWidget"""

    def __init__(self, widget: ChatWidget, renderer: TerminalRenderer):
        self.widget = widget
        self.renderer = renderer
        self.running = False

    def print_banner(self):
        W = config.CLI_WIDTH
        print()
        print(f"{Fore.MAGENTA}╔{'═' * W}╗{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}║{Fore.CYAN + Style.BRIGHT}{self.widget.title:^{W}}{Style.RESET_ALL}{Fore.MAGENTA}║{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}║{Fore.YELLOW}{self.widget.footer:^{W}}{Style.RESET_ALL}{Fore.MAGENTA}║{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}╚{'═' * W}╝{Style.RESET_ALL}")
        print()

    def print_help(self):
        bar = f"{Fore.CYAN}{'─' * 60}{Style.RESET_ALL}"
        print(f"\n{bar}")
        print(f"{Fore.CYAN + Style.BRIGHT}  Commands{Style.RESET_ALL}")
        print(bar)
        for cmd, desc in [
            ("help",    "Show this help message"),
            ("history", "Show the conversation so far"),
            ("stats",   "Show knowledge and conversation statistics"),
            ("open",    "Open the chat panel"),
            ("close",   "Close the chat panel"),
            ("clear",   "Clear the conversation"),
            ("quit",    "Exit the application"),
        ]:
            print(f"  {Fore.GREEN}{cmd:<10}{Style.RESET_ALL}{Fore.WHITE}{desc}{Style.RESET_ALL}")
        print(f"\n  {self.widget.placeholder}\n{bar}\n")

    def print_error(self, error: str):
        print(f"\n{Fore.RED}  ✗  {error}{Style.RESET_ALL}\n")

    def print_history(self):
        transcript = self.widget.transcript
        if not transcript:
            print(f"{Fore.CYAN}  No messages yet.{Style.RESET_ALL}\n")
            return
        for entry in transcript:
            if entry.from_user:
                print(f"  {Fore.LIGHTMAGENTA_EX}{config.CLI_PROMPT:>5} ›{Style.RESET_ALL} {entry.text}")
            else:
                print(f"  {Fore.GREEN}{config.CLI_ASSISTANT:>5} ›{Style.RESET_ALL} {entry.text}")
        print()

    def print_stats(self):
        strategy = self.widget.strategy
        knowledge = getattr(strategy, 'knowledge', None)
        if knowledge is not None:
            kb_stats = knowledge.get_statistics()
            print(f"  {Fore.WHITE}Strategy        : overlap scoring{Style.RESET_ALL}")
            print(f"  {Fore.WHITE}Entries         : {kb_stats['total_entries']}{Style.RESET_ALL}")
            print(f"  {Fore.WHITE}Vocabulary      : {kb_stats['vocabulary_size']}{Style.RESET_ALL}")
        else:
            print(f"  {Fore.WHITE}Strategy        : substring keyword{Style.RESET_ALL}")
            print(f"  {Fore.WHITE}Keywords        : {len(strategy.responses)}{Style.RESET_ALL}")
        summary = self.widget.session.get_summary()
        print(f"  {Fore.WHITE}Messages        : {summary['total_messages']}{Style.RESET_ALL}")
        print(f"  {Fore.WHITE}Fallback replies: {summary['fallback_replies']}{Style.RESET_ALL}\n")

    def get_input(self) -> str:
        try:
            prompt = (
                f"{Fore.LIGHTMAGENTA_EX + Style.BRIGHT}  {config.CLI_PROMPT} {Style.RESET_ALL}"
                f"{Fore.LIGHTMAGENTA_EX}›{Style.RESET_ALL} "
            )
            return input(prompt)
        except (KeyboardInterrupt, EOFError):
            return "quit"

    def handle_command(self, command: str):
        """
        Handle special commands.
        Returns True to continue, False to exit, None if not a command.
        """
        cmd = command.strip().lower()

        if cmd in ('quit', 'exit', 'q'):
            print(f"\n{Fore.MAGENTA}  Thanks for visiting! Goodbye!{Style.RESET_ALL}\n")
            return False
        if cmd == 'help':
            self.print_help()
            return True
        if cmd == 'history':
            self.print_history()
            return True
        if cmd in ('stats', 'info'):
            self.print_stats()
            return True
        if cmd == 'open':
            self.widget.open()
            return True
        if cmd == 'close':
            self.widget.close()
            return True
        if cmd == 'clear':
            self.widget.reset()
            self.renderer.flush()
            print(f"{Fore.GREEN}  ✓  Conversation cleared{Style.RESET_ALL}\n")
            return True

        return None  # Not a command

    def send(self, text: str):
        """Submit a message through the renderer and print the reply"""
        if not self.renderer.submit(text):
            return
        if self.widget.session.awaiting_reply:
            with _Spinner("Typing", Fore.CYAN):
                self.widget.session.wait()
        self.renderer.flush()

    def run(self):
        """Main CLI loop."""
        self.print_banner()
        self.print_help()
        self.widget.open()
        self.running = True

        while self.running:
            try:
                user_input = self.get_input()
                if not user_input.strip():
                    continue

                result = self.handle_command(user_input)
                if result is False:
                    break
                if result is True:
                    continue

                if not self.widget.visible:
                    print(f"{Fore.YELLOW}  The chat is closed. Type 'open' to chat.{Style.RESET_ALL}\n")
                    continue
                self.send(user_input)

            except KeyboardInterrupt:
                print(f"\n{Fore.YELLOW}  Use 'quit' to exit.{Style.RESET_ALL}\n")
            except Exception as e:
                self.print_error(f"Unexpected error: {e}")
                logger.exception("Unexpected error in main loop")

        self.widget.session.cancel()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foliobot",
        description="foliobot — portfolio chat widget answering from a local knowledge base",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            f"Developed by: {__author__}\n"
            f"Powered by:   {__powered_by__}\n"
            f"Version:      {__version__}"
        ),
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"foliobot v{__version__}",
    )
    parser.add_argument(
        "--about",
        action="store_true",
        help="Show detailed about information and exit",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--kb",
        help=(
            "JSON knowledge base: a list of question/answer objects or a keyword object "
            "(default: $FOLIOBOT_KB_FILE)"
        ),
    )
    source.add_argument(
        "--keywords",
        action="store_true",
        help="Use the built-in keyword responses instead of question/answer pairs",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=config.REPLY_DELAY,
        help="Seconds before the bot reply appears (default: %(default)s)",
    )
    parser.add_argument(
        "--no-typing",
        action="store_true",
        help="Print replies at once instead of the typewriter effect",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    return parser


def load_knowledge(args):
    """Knowledge source for the widget; explicit flags win over FOLIOBOT_KB_FILE"""
    if args.keywords:
        return default_keyword_responses()
    path = args.kb or config.KNOWLEDGE_BASE_FILE
    if path:
        return load_knowledge_base(path)
    return default_knowledge_base()


def main(argv=None):
    """Main entry point: supports --version, --about, and interactive mode"""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(format='%(levelname)s: %(name)s: %(message)s')
        logging.getLogger('foliobot').setLevel(logging.DEBUG)

    if args.about:
        print(f"{Fore.CYAN}foliobot{Style.RESET_ALL}")
        print(f"  Portfolio chat widget · local knowledge base, no network calls")
        print(f"  {Fore.GREEN}Version   : {__version__}{Style.RESET_ALL}")
        print(f"  {Fore.GREEN}Developer : {__author__}{Style.RESET_ALL}")
        print(f"  {Fore.BLUE}Powered by: {__powered_by__}{Style.RESET_ALL}")
        return 0

    try:
        knowledge = load_knowledge(args)
    except KnowledgeBaseError as e:
        print(f"{Fore.RED}  ✗  {e}{Style.RESET_ALL}", file=sys.stderr)
        return 2

    renderer = TerminalRenderer(typing_delay=0 if args.no_typing else 0.013)
    widget = ChatWidget(knowledge, renderer=renderer, reply_delay=max(args.delay, 0.0))
    cli = FolioBotCLI(widget, renderer)
    try:
        cli.run()
    except Exception as e:
        print(f"{Fore.RED}Fatal error: {e}{Style.RESET_ALL}")
        logging.exception("Fatal error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
