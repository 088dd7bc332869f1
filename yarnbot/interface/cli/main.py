"""CLI chat for the KSP Yarns assistant.

One-shot:     python -m yarnbot.interface.cli.main --message "Do you sell cotton yarn?"
Interactive:  python -m yarnbot.interface.cli.main   (type /reset to clear, /quit to leave)
"""

import argparse
import sys
from collections.abc import Callable, Sequence
from dataclasses import replace

from yarnbot.application.dto.chat_dto import ChatAnswer, ChatRequest
from yarnbot.application.use_cases.answer_query import AnswerQuery
from yarnbot.config.composition import build_answer_query_use_case, configure_logging
from yarnbot.config.settings import AppSettings
from yarnbot.domain.models import ConversationContext

PROMPT = "you> "
RESET_COMMAND = "/reset"
QUIT_COMMANDS = frozenset({"/quit", "/exit"})


def _print_answer(answer: ChatAnswer) -> None:
    print(f"bot> {answer.response_text}")
    if answer.suggested_questions:
        print("suggestions:")
        for q in answer.suggested_questions:
            print(f"  - {q}")


def run_interactive(
    uc: AnswerQuery,
    read: Callable[[str], str] = input,
) -> ConversationContext:
    """Read-eval-print loop; returns the final context (useful for tests)."""
    context = uc.reset()
    while True:
        try:
            line = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        command = line.strip().lower()
        if command in QUIT_COMMANDS:
            break
        if command == RESET_COMMAND:
            context = uc.reset(context)
            print("bot> Conversation cleared.")
            continue
        answer = uc.execute(ChatRequest(text=line, context=context))
        context = answer.updated_context
        _print_answer(answer)
    return context


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Chat with the KSP Yarns assistant")
    parser.add_argument("--message", help="Answer a single message and exit")
    parser.add_argument(
        "--seed", type=int, help="Seed the phrasing variation for reproducible replies"
    )
    parser.add_argument("--verbose", action="store_true", help="Show band and top score")
    args = parser.parse_args(argv)

    settings = AppSettings()
    if args.seed is not None:
        settings = replace(settings, random_seed=args.seed)
    configure_logging(settings)
    uc = build_answer_query_use_case(settings)

    if args.message is None:
        run_interactive(uc)
        return 0

    answer = uc.execute(ChatRequest(text=args.message, context=uc.reset()))
    _print_answer(answer)
    if args.verbose:
        print(f"[topic={answer.topic} band={answer.band} score={answer.top_score:.3f}]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
