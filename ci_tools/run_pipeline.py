"""
Script: ci_tools/run_pipeline.py
What: Runs the whole pipeline locally, in the same order as the workflow.
Doing: Test, consistency check, package, build image, smoke test, then publish when `PUBLISH=true`.
Why: Lets a developer reproduce the CI run from a shell with one command.
Goal: Stop at the first failing stage so build and push never follow a failed test run.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ci_tools.common import env_flag


Stage = tuple[str, Callable[[], None]]


def pipeline_stages(*, publish: bool) -> list[Stage]:
    from ci_tools.build_image import main as build_image
    from ci_tools.check_artifact_consistency import main as check_artifact_consistency
    from ci_tools.package_artifact import main as package_artifact
    from ci_tools.publish_image import main as publish_image
    from ci_tools.run_tests import main as run_tests
    from ci_tools.smoke_test_image import main as smoke_test_image

    stages: list[Stage] = [
        ("run-tests", run_tests),
        ("check-artifact-consistency", check_artifact_consistency),
        ("package-artifact", package_artifact),
        ("build-image", build_image),
        ("smoke-test-image", smoke_test_image),
    ]
    if publish:
        stages.append(("publish-image", publish_image))
    return stages


def run_stages(stages: Sequence[Stage]) -> list[str]:
    """
    Run stages in order and return the names that completed.

    Any exception from a stage propagates immediately, so later stages never run.
    """
    completed: list[str] = []
    for index, (name, stage) in enumerate(stages, start=1):
        print(f"==> [{index}/{len(stages)}] {name}")
        stage()
        completed.append(name)
    return completed


def main() -> None:
    publish = env_flag("PUBLISH")
    completed = run_stages(pipeline_stages(publish=publish))
    if not publish:
        print("Skipped publish-image (set PUBLISH=true to push)")
    print(f"Pipeline finished: {len(completed)} stages passed")


if __name__ == "__main__":
    main()
