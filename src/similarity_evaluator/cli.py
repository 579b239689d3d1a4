"""CLI to score an LLM response against an expected answer.

Usage:
    similarity-evaluator "The French capital city is Paris" "The capital of France is Paris"
    similarity-evaluator EXPECTED ACTUAL --threshold 0.8
    similarity-evaluator EXPECTED ACTUAL --provider openai --model text-embedding-3-small --json

Exit codes:
    0 - evaluation passed
    1 - evaluation failed (score below threshold)
    2 - configuration, usage, embedding or degenerate-vector error
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from .config import get_settings
from .evaluator import EvaluationResult, SimilarityEvaluator
from .exceptions import SimilarityEvaluatorError
from .services.embeddings import create_embedding_provider

logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="similarity-evaluator",
        description="Score semantic similarity between an expected and an actual text"
    )
    parser.add_argument("expected", type=str, help="Expected (reference) text")
    parser.add_argument("actual", type=str, help="Actual (model-generated) text")
    parser.add_argument(
        "--threshold",
        type=float,
        default=settings.minimum_similarity,
        help="Minimum cosine similarity for a pass, between -1.0 and 1.0 "
             f"(default: {settings.minimum_similarity})"
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=settings.embedding_provider,
        help="Embedding provider: sentence-transformers or openai "
             f"(default: {settings.embedding_provider})"
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help=f"Embedding model (default: {settings.embedding_model})"
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_result(result: EvaluationResult, minimum_similarity: float, as_json: bool = False) -> None:
    """Print an evaluation result.

    Args:
        result: Evaluation result to display
        minimum_similarity: Threshold that was applied
        as_json: Print machine-readable JSON instead of text
    """
    if as_json:
        print(json.dumps({
            "passed": result.passed,
            "score": result.score,
            "minimum_similarity": minimum_similarity,
        }))
        return

    verdict = "PASS" if result.passed else "FAIL"
    print(f"Cosine similarity: {result.score:.4f}")
    print(f"Minimum similarity: {minimum_similarity:.4f}")
    print(f"Result: {verdict}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        kwargs = {}
        if args.provider.lower() == "openai":
            kwargs = {
                "base_url": settings.embedding_api_base_url,
                "api_key": settings.embedding_api_key,
                "timeout": settings.embedding_timeout_seconds,
            }
        # Configured model only applies to the configured provider
        default_model = (
            settings.embedding_model
            if args.provider.lower() == settings.embedding_provider
            else None
        )
        provider = create_embedding_provider(
            args.provider,
            model=args.model or default_model,
            **kwargs
        )
        evaluator = SimilarityEvaluator(provider, args.threshold)
        result = evaluator.evaluate_texts(args.expected, args.actual)
    except SimilarityEvaluatorError as e:
        logger.error(f"Evaluation failed: {e.message}", extra={"details": e.details})
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    print_result(result, evaluator.minimum_similarity, as_json=args.json)
    return EXIT_PASSED if result.passed else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
