"""
Script: ci_tools package
What: Holds the Python workflow helpers behind each pipeline step.
Doing: Groups CLI entrypoints and shared utility code in one importable package.
Why: Keeps workflow logic readable and testable instead of spreading it across workflow YAML.
Goal: Provide a clear, maintainable home for test, package, image build, and publish logic.
"""
