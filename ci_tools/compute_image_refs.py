"""
Script: ci_tools/compute_image_refs.py
What: Derives image tags and registry refs for one pipeline run.
Doing: Builds one tag list, applies it to both Docker Hub and GHCR, and writes outputs.
Why: Both registries must carry the same tags for the same image content.
Goal: Give the build and publish steps one shared list of image refs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ci_tools.common import (
    CiToolError,
    normalize_owner,
    optional_env,
    require_env,
    short_sha,
    write_github_outputs,
)
from ci_tools.project import load_artifact_info


DOCKERHUB_REGISTRY = "docker.io"
GHCR_REGISTRY = "ghcr.io"
# Docker tag grammar: up to 128 chars, first char word char, then word chars, '.', '-'.
VALID_TAG_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")


@dataclass(frozen=True)
class ImageRefs:
    image_name: str
    tags: list[str]
    repositories: dict[str, str]

    def refs_for(self, registry: str) -> list[str]:
        repository = self.repositories[registry]
        return [f"{repository}:{tag}" for tag in self.tags]

    @property
    def all_refs(self) -> list[str]:
        refs: list[str] = []
        for registry in self.repositories:
            refs.extend(self.refs_for(registry))
        return refs


def build_tags(*, version: str, commit_sha: str = "") -> list[str]:
    """
    Return the tags every registry receives.

    Order is stable: version tag, `latest`, then `sha-<short>` when a commit is known.
    """
    tags = [version, "latest"]
    if commit_sha:
        tags.append(f"sha-{short_sha(commit_sha)}")
    for tag in tags:
        if not VALID_TAG_RE.match(tag):
            raise CiToolError(f"Invalid image tag: {tag}")
    return tags


def build_image_refs(
    *,
    image_name: str,
    version: str,
    dockerhub_namespace: str,
    ghcr_owner: str,
    commit_sha: str = "",
) -> ImageRefs:
    if not image_name:
        raise CiToolError("Image name must not be empty")
    return ImageRefs(
        image_name=image_name,
        tags=build_tags(version=version, commit_sha=commit_sha),
        repositories={
            DOCKERHUB_REGISTRY: f"{DOCKERHUB_REGISTRY}/{dockerhub_namespace.lower()}/{image_name}",
            GHCR_REGISTRY: f"{GHCR_REGISTRY}/{normalize_owner(ghcr_owner)}/{image_name}",
        },
    )


def image_refs_from_env() -> ImageRefs:
    """Read image naming inputs from workflow env."""
    info = load_artifact_info()
    return build_image_refs(
        image_name=optional_env("IMAGE_NAME", info.name),
        version=info.version,
        dockerhub_namespace=require_env("DOCKERHUB_USERNAME"),
        ghcr_owner=require_env("GITHUB_REPOSITORY_OWNER"),
        commit_sha=optional_env("GITHUB_SHA"),
    )


def local_image_ref() -> str:
    """Registry-less `<name>:<version>` ref for local builds."""
    info = load_artifact_info()
    image_name = optional_env("IMAGE_NAME", info.name)
    if not image_name:
        raise CiToolError("Image name must not be empty")
    return f"{image_name}:{info.version}"


def build_refs_from_env() -> list[str]:
    """
    Return the refs to tag a local build with.

    With registry naming inputs present (as in CI), these are the full registry refs.
    Without them (a local `run-pipeline`), a single local ref is used so building and
    smoke testing work without any registry configuration.
    """
    if optional_env("DOCKERHUB_USERNAME") and optional_env("GITHUB_REPOSITORY_OWNER"):
        return image_refs_from_env().all_refs
    return [local_image_ref()]


def main() -> None:
    image_refs = image_refs_from_env()

    # Space-separated lists are easy to split again in later shell or Python steps.
    write_github_outputs(
        {
            "image_name": image_refs.image_name,
            "image_tags": " ".join(image_refs.tags),
            "dockerhub_refs": " ".join(image_refs.refs_for(DOCKERHUB_REGISTRY)),
            "ghcr_refs": " ".join(image_refs.refs_for(GHCR_REGISTRY)),
            "primary_ref": image_refs.all_refs[0],
        }
    )
    for ref in image_refs.all_refs:
        print(f"Image ref: {ref}")


if __name__ == "__main__":
    main()
