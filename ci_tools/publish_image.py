"""
Script: ci_tools/publish_image.py
What: Pushes the built image to Docker Hub and GHCR.
Doing: Logs in to each registry with `--password-stdin`, then pushes every ref for that registry.
Why: Keeps credentials off the command line and both registries in step.
Goal: Publish identical tags to both registries, stopping at the first failure.
"""

from __future__ import annotations

from dataclasses import dataclass

from ci_tools.common import container_engine, require_env, run_cmd
from ci_tools.compute_image_refs import (
    DOCKERHUB_REGISTRY,
    GHCR_REGISTRY,
    ImageRefs,
    image_refs_from_env,
)


@dataclass(frozen=True)
class RegistryCredentials:
    registry: str
    username: str
    # Never printed; sent to the engine over stdin only.
    password: str


def login_command(*, engine: str, credentials: RegistryCredentials) -> list[str]:
    return [
        engine,
        "login",
        credentials.registry,
        "--username",
        credentials.username,
        "--password-stdin",
    ]


def push_command(*, engine: str, ref: str) -> list[str]:
    return [engine, "push", ref]


def credentials_from_env() -> list[RegistryCredentials]:
    """
    Read registry credentials from workflow env.

    Docker Hub uses repository secrets; GHCR uses the workflow's own token.
    """
    return [
        RegistryCredentials(
            registry=DOCKERHUB_REGISTRY,
            username=require_env("DOCKERHUB_USERNAME"),
            password=require_env("DOCKERHUB_TOKEN"),
        ),
        RegistryCredentials(
            registry=GHCR_REGISTRY,
            username=require_env("GHCR_USERNAME"),
            password=require_env("GHCR_TOKEN"),
        ),
    ]


def publish_image(
    image_refs: ImageRefs,
    credentials: list[RegistryCredentials],
    *,
    engine: str,
) -> list[str]:
    """Log in and push registry by registry. Return the refs pushed, in order."""
    pushed: list[str] = []
    for creds in credentials:
        run_cmd(
            login_command(engine=engine, credentials=creds),
            input_text=creds.password + "\n",
        )
        print(f"Logged in to {creds.registry} as {creds.username}")

        for ref in image_refs.refs_for(creds.registry):
            run_cmd(push_command(engine=engine, ref=ref), capture_output=False)
            pushed.append(ref)
            print(f"Pushed {ref}")
    return pushed


def main() -> None:
    pushed = publish_image(image_refs_from_env(), credentials_from_env(), engine=container_engine())
    print(f"Published {len(pushed)} image refs")


if __name__ == "__main__":
    main()
