from __future__ import annotations

GREETING = "Hello from demo-app!"


def add(a: int, b: int) -> int:
    """Return the sum of two integers."""
    return a + b


def main() -> None:
    print(GREETING)


if __name__ == "__main__":
    main()
