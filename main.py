import sys
import threading
import time

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.config import Config
from orchestrator.core import Resolver
from orchestrator.factory import create_resolver


def show_loading_animation(stop_event: threading.Event) -> None:
    """
    Show a loading animation in the console.

    Args:
        stop_event: A threading.Event that will be set to stop the animation
    """
    while not stop_event.is_set():
        for char in '|/-\\':
            if stop_event.is_set():
                break
            sys.stdout.write(f'\r\033[93mSearching {char}\033[0m')
            sys.stdout.flush()
            time.sleep(0.1)

    # Clear the loading line
    sys.stdout.write('\r' + ' ' * 20 + '\r')
    sys.stdout.flush()


def run_with_animation(func, *args) -> str:
    """Run a blocking resolver call while the spinner is shown."""
    stop_animation = threading.Event()
    loading_thread = threading.Thread(target=show_loading_animation, args=(stop_animation,))
    loading_thread.daemon = True
    loading_thread.start()
    try:
        return func(*args)
    finally:
        stop_animation.set()
        loading_thread.join()


def handle_input(resolver: Resolver, user_input: str) -> str | None:
    """
    Dispatch one line of input. Returns the text to show, or None to exit.
    """
    command, _, rest = user_input.partition(' ')
    command = command.lower()

    if command in ('exit', 'quit'):
        return None

    if command == 'help':
        return (
            "=== Available Commands ===\n"
            "help            - Show this help message\n"
            "test            - Check provider configuration and connectivity\n"
            "quick <query>   - Raw search result without summarizing\n"
            "detailed <query> - Longer answer, real-time sources first\n"
            "exit/quit       - Exit the program\n"
            "Anything else is treated as a spoken query."
        )

    if command == 'test':
        return run_with_animation(resolver.run_diagnostics)

    if command == 'quick' and rest.strip():
        return run_with_animation(resolver.quick_search, rest)

    if command == 'detailed' and rest.strip():
        return run_with_animation(resolver.answer_detailed, rest)

    return run_with_animation(resolver.answer, user_input)


def main():
    config = Config()
    resolver = create_resolver(config)

    print("\n=== VoxQuery ===")
    print(config.describe())
    for name in config.missing_credentials():
        print(f"Warning: {name} is not set. Affected providers will report a configuration error.")
    print("Type a question, 'help' for commands, or 'exit' to quit\n")

    while True:
        try:
            user_input = input("You: ").strip()
            if not user_input:
                continue

            output = handle_input(resolver, user_input)
            if output is None:
                print("\nGoodbye!")
                break

            print(f"\nAssistant: {output}\n")

        except (KeyboardInterrupt, EOFError):
            print("\nExiting...")
            break


if __name__ == "__main__":
    main()
