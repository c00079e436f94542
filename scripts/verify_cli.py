#!/usr/bin/env python3
"""CLI batch verification runner for Murajaa.

Reads a JSONL file of recitations ({"id", "transcript", "expected"} per line)
and writes one result per recitation. Emits JSONL progress events to stdout.
"""

import argparse
import json
import sys
import time
from pathlib import Path

# Allow running without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "murajaa"))

from murajaa._logging import disable_logging, enable_debug_logging
from murajaa.core import tokenize, verify
from murajaa.refinement import ChatCompletionAnalyzer


def emit(event: dict) -> None:
    print(json.dumps(event, ensure_ascii=False))
    sys.stdout.flush()


def load_recitations(input_path: Path) -> list[dict]:
    recitations: list[dict] = []
    with open(input_path, "r", encoding="utf-8") as f:
        for number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            record = json.loads(line)
            record.setdefault("id", number)
            recitations.append(record)
    return recitations


def expected_words(record: dict) -> list[str]:
    expected = record.get("expected", "")
    if isinstance(expected, list):
        return [str(word) for word in expected]
    return tokenize(expected)


def save_output(output_path: Path, results: list[dict]) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)

    scores = [r["score"] for r in results]
    output_data = {
        "total": len(results),
        "passed": sum(1 for r in results if r["passed"]),
        "avg_score": round(sum(scores) / len(scores), 1) if scores else 0.0,
        "results": results,
    }

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(output_data, f, ensure_ascii=False, indent=2)

    return output_path


def main() -> int:
    parser = argparse.ArgumentParser(description="Batch verify Quran recitation transcripts")
    parser.add_argument("--input", required=True, help="JSONL file with id, transcript and expected")
    parser.add_argument("--output", required=True, help="Output JSON file")
    parser.add_argument("--strictness", type=int, default=None, choices=(1, 2, 3), help="Hafz level")
    parser.add_argument("--pass-threshold", type=int, default=None, help="Minimum passing score")
    parser.add_argument(
        "--refine",
        action="store_true",
        help="Re-score imperfect recitations with the chat-completions analyzer (needs MURAJAA_OPENAI_API_KEY)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    verbosity.add_argument("--quiet", action="store_true", help="Silence library logging")

    args = parser.parse_args()

    if args.verbose:
        enable_debug_logging()
    elif args.quiet:
        disable_logging()

    recitations = load_recitations(Path(args.input))
    emit({"type": "job_start", "total": len(recitations)})

    analyzer = ChatCompletionAnalyzer() if args.refine else None
    if analyzer is not None:
        analyzer.open()

    results: list[dict] = []
    failed = 0

    try:
        for record in recitations:
            start_time = time.time()
            try:
                result = verify(
                    record.get("transcript", ""),
                    expected_words(record),
                    strictness=args.strictness,
                    use_refinement=args.refine,
                    analyzer=analyzer,
                    pass_threshold=args.pass_threshold,
                )
            except Exception as exc:
                failed += 1
                emit({"type": "recitation_error", "id": record["id"], "message": str(exc)})
                continue

            results.append({"id": record["id"], **result.model_dump(mode="json")})
            emit({
                "type": "recitation_done",
                "id": record["id"],
                "score": result.score,
                "refined": result.refined,
                "passed": result.passed,
                "seconds": round(time.time() - start_time, 3),
            })
    finally:
        if analyzer is not None:
            analyzer.close()

    save_output(Path(args.output), results)

    emit({"type": "job_done", "processed": len(results), "failed": failed})
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
