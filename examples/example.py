"""
FailStack Basic Usage Example

This example demonstrates:
1. Creating a wrapped error with errorf()
2. Wrapping a sentinel and matching it through wrappers
3. Adding context with wrap_prefix()
4. Reading the captured stack as text and as frames
"""

import failstack


END_OF_INPUT = EOFError("end of input")


def halve(x: int) -> int:
    if x % 2 == 1:
        raise failstack.errorf("can only halve even numbers, got %d", x)
    return x // 2


def read_record(records: list) -> str:
    if not records:
        raise failstack.wrap(END_OF_INPUT)
    return records.pop(0)


def load(records: list) -> str:
    try:
        return read_record(records)
    except failstack.WrappedError as e:
        raise failstack.wrap_prefix(e, "loading records")


def main():
    print("=" * 60)
    print("FailStack Basic Example")
    print("=" * 60)

    # ===== Example 1: errorf =====
    print("\n📌 Example 1: Formatted error with a stack")
    print("-" * 60)

    try:
        halve(3)
    except failstack.WrappedError as err:
        print(err.error_stack())

    # ===== Example 2: sentinel matching =====
    print("\n📌 Example 2: Matching a sentinel through wrappers")
    print("-" * 60)

    try:
        load([])
    except failstack.WrappedError as err:
        print(f"Message: {err.message}")
        print(f"Is end of input: {failstack.matches(err, END_OF_INPUT)}")
        print(f"Is ValueError: {failstack.find(err, ValueError) is not None}")

        # ===== Example 3: frames =====
        print("\n📌 Example 3: Frames, innermost first")
        print("-" * 60)
        for frame in err.stack_frames()[:3]:
            print(frame.file, frame.line_number, frame.package, frame.name)


if __name__ == "__main__":
    main()
