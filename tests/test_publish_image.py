"""
Script: tests/test_publish_image.py
What: Tests registry login and push sequencing.
Doing: Replaces `run_cmd` with a mock and inspects the commands it receives.
Why: Publishing must keep secrets off the command line and stop at the first failure.
Goal: Keep both registries receiving the same refs in a predictable order.
"""

from __future__ import annotations

import os
import unittest
from unittest import mock

from ci_tools.common import CiToolError
from ci_tools.compute_image_refs import build_image_refs
from ci_tools.publish_image import RegistryCredentials, credentials_from_env, publish_image


REFS = build_image_refs(
    image_name="demo-app", version="1.0.0", dockerhub_namespace="janedoe", ghcr_owner="octo"
)
CREDS = [
    RegistryCredentials(registry="docker.io", username="janedoe", password="hub-secret"),
    RegistryCredentials(registry="ghcr.io", username="octocat", password="gh-secret"),
]


class PublishImageTests(unittest.TestCase):
    def test_logs_in_then_pushes_each_registry(self) -> None:
        with mock.patch("ci_tools.publish_image.run_cmd", return_value="") as run:
            pushed = publish_image(REFS, CREDS, engine="docker")

        self.assertEqual(pushed, REFS.all_refs)
        commands = [call.args[0] for call in run.call_args_list]
        self.assertEqual(
            commands,
            [
                ["docker", "login", "docker.io", "--username", "janedoe", "--password-stdin"],
                ["docker", "push", "docker.io/janedoe/demo-app:1.0.0"],
                ["docker", "push", "docker.io/janedoe/demo-app:latest"],
                ["docker", "login", "ghcr.io", "--username", "octocat", "--password-stdin"],
                ["docker", "push", "ghcr.io/octo/demo-app:1.0.0"],
                ["docker", "push", "ghcr.io/octo/demo-app:latest"],
            ],
        )

    def test_password_goes_over_stdin_only(self) -> None:
        with mock.patch("ci_tools.publish_image.run_cmd", return_value="") as run:
            publish_image(REFS, CREDS, engine="docker")

        login_call = run.call_args_list[0]
        self.assertEqual(login_call.kwargs["input_text"], "hub-secret\n")
        for call in run.call_args_list:
            self.assertNotIn("hub-secret", call.args[0])
            self.assertNotIn("gh-secret", call.args[0])

    def test_failed_login_stops_before_any_push(self) -> None:
        with mock.patch(
            "ci_tools.publish_image.run_cmd", side_effect=CiToolError("denied")
        ) as run:
            with self.assertRaises(CiToolError):
                publish_image(REFS, CREDS, engine="docker")
        self.assertEqual(run.call_count, 1)

    def test_credentials_from_env(self) -> None:
        env = {
            "DOCKERHUB_USERNAME": "janedoe",
            "DOCKERHUB_TOKEN": "hub-secret",
            "GHCR_USERNAME": "octocat",
            "GHCR_TOKEN": "gh-secret",
        }
        with mock.patch.dict(os.environ, env):
            creds = credentials_from_env()
        self.assertEqual([c.registry for c in creds], ["docker.io", "ghcr.io"])

    def test_credentials_require_token(self) -> None:
        env = {"DOCKERHUB_USERNAME": "janedoe", "DOCKERHUB_TOKEN": ""}
        with mock.patch.dict(os.environ, env):
            with self.assertRaisesRegex(CiToolError, "DOCKERHUB_TOKEN"):
                credentials_from_env()


if __name__ == "__main__":
    unittest.main()
