"""
Command-line diagnostics for the thinking control pipeline

Shows how a prompt would be classified, which budget band applies, whether
thinking would be enabled, and what the first message looks like after
locale injection. Nothing is sent anywhere.
"""
import sys
import argparse

from thinking_control.config import PipelineConfig, THINKING_BUDGET, DEFAULT_THINKING_BUDGET
from thinking_control.core import lexicon
from thinking_control.core.messages import collect_user_text
from thinking_control.core.pipeline import ThinkingPipeline
from thinking_control.core.task_classifier import TaskType
from thinking_control.utils.unified_logger import setup_cli_logger, Colors


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the thinking decision for a prompt.")
    parser.add_argument("prompt", nargs="?", default=None, help="Prompt text (or use --file / stdin).")
    parser.add_argument("-f", "--file", default=None, help="Read the prompt from a file.")
    parser.add_argument("-s", "--system", default=None, help="Optional system prompt.")
    parser.add_argument("-b", "--budget", default=THINKING_BUDGET,
                        help=f"Thinking budget: number or 'unlimited' (default: {THINKING_BUDGET or DEFAULT_THINKING_BUDGET}).")
    parser.add_argument("--no-english", action="store_true", help="Disable English-only enforcement.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Also print the debug decision log.")
    return parser


def read_prompt(args, parser) -> str:
    if args.file:
        with open(args.file, 'r', encoding='utf-8') as f:
            return f.read()
    if args.prompt is not None:
        return args.prompt
    if not sys.stdin.isatty():
        return sys.stdin.read()
    parser.error("a prompt is required (positional argument, --file, or stdin)")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_cli_logger(enable_colors=not args.no_color, verbose=args.verbose)
    prompt = read_prompt(args, parser)

    messages = []
    if args.system:
        messages.append({'role': 'system', 'content': args.system})
    messages.append({'role': 'user', 'content': prompt})

    config = PipelineConfig(force_english=not args.no_english, thinking_budget=args.budget)
    pipeline = ThinkingPipeline(config)
    result = pipeline.transform_request(messages)
    details = result.details

    print(f"{Colors.YELLOW}Task type:{Colors.ENDC} {details.type.value}")
    print(f"{Colors.GRAY}  reasoning score: {details.reasoning_score}{Colors.ENDC}")
    print(f"{Colors.GRAY}  execution score: {details.execution_score}{Colors.ENDC}")
    user_text = collect_user_text(messages)
    for task_type in (TaskType.REASONING, TaskType.EXECUTION):
        found = lexicon.matched_keywords(user_text, pipeline.classifier.keywords.get(task_type.value, ()))
        print(f"{Colors.GRAY}  {task_type.value} keywords: {', '.join(found) or '-'}{Colors.ENDC}")
    print(f"{Colors.GRAY}  text ({details.text_length} chars): {details.text_preview!r}{Colors.ENDC}")
    print(f"{Colors.YELLOW}Budget:{Colors.ENDC} {result.budget} - "
          f"{pipeline.calculator.get_budget_description(result.budget)}")
    state_color = Colors.GREEN if result.thinking_enabled else Colors.RED
    print(f"{Colors.YELLOW}Thinking:{Colors.ENDC} {state_color}"
          f"{'enabled' if result.thinking_enabled else 'disabled'}{Colors.ENDC}")

    if result.messages:
        first = result.messages[0]
        print(f"{Colors.YELLOW}First message ({first.get('role')}):{Colors.ENDC}")
        print(first.get('content'))

    return 0


if __name__ == "__main__":
    sys.exit(main())
