"""CLI entrypoint: build an activity diagram from a model JSON file."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from .builder import ActivityDiagramBuildPhase
from .config import BuilderSettings
from .errors import DiagramBuildError
from .logging_utils import setup_logging
from .phases import DiagramReportPhase, ModelIngestionPhase
from .pipeline import PipelinePhase, PipelineRunner

logger = logging.getLogger("activity_graph.cli")


def build_default_phases() -> List[PipelinePhase]:
    return [
        ModelIngestionPhase(),
        ActivityDiagramBuildPhase(),
        DiagramReportPhase(),
    ]


def run_pipeline(input_path: str, submission_id: int) -> Dict[str, Any]:
    runner = PipelineRunner(phases=build_default_phases())
    final_context = runner.run({"input_path": input_path, "submission_id": submission_id})
    artifact = final_context["diagram"].to_json()
    artifact["meta"] = {
        "input_path": input_path,
        "submission_id": submission_id,
        "completed_phases": final_context.get("completed_phases", []),
        "build_report": final_context.get("build_report", {}),
        "validation_report": final_context.get("validation_report", {}),
    }
    return artifact


def parse_args(argv: List[str] | None = None, settings: BuilderSettings | None = None) -> argparse.Namespace:
    settings = settings or BuilderSettings()
    parser = argparse.ArgumentParser(description="Build a typed activity diagram from a model JSON file.")
    parser.add_argument("--input-path", required=True, help="Path to the activity diagram model JSON.")
    parser.add_argument(
        "--submission-id",
        type=int,
        default=0,
        help="Submission identifier attached to the resulting diagram.",
    )
    parser.add_argument(
        "--output-path",
        default=settings.output_path,
        help="Where to save the resulting diagram JSON.",
    )
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    settings = BuilderSettings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    args = parse_args(argv, settings)

    try:
        artifact = run_pipeline(input_path=args.input_path, submission_id=args.submission_id)
    except DiagramBuildError as error:
        logger.error("Diagram build failed: %s", error)
        print(f"Diagram build failed: {error}", file=sys.stderr)
        return 1

    output_path = Path(args.output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(artifact, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Activity diagram saved to: {output_path.resolve()}")
    print(
        "Counts:",
        f"nodes={len(artifact['nodes'])}",
        f"activities={len(artifact['activities'])}",
        f"control_flows={len(artifact['control_flows'])}",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
