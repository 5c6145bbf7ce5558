"""Decoding a Saved Stream

iter_events() decodes any iterable of SSE lines, not just a live HTTP
response. Here a captured stream body is replayed from a string, including
the keep-alive comments and blank lines the server interleaves.

Demonstrates: iter_events(), StreamDecodeError, StreamTruncatedError
"""

from chatloop import StreamDecodeError, StreamTruncatedError, iter_events

CAPTURED = """\
: keep-alive

data: {"choices":[{"index":0,"delta":{"role":"assistant"}}]}

data: {"choices":[{"index":0,"delta":{"content":"Hello"}}]}

data: {"choices":[{"index":0,"delta":{"content":", world"}}]}

data: [DONE]
"""


def main():
    text = ""
    for event in iter_events(CAPTURED.splitlines(keepends=True)):
        text += event["choices"][0]["delta"].get("content") or ""
    print(f"Decoded: {text!r}")

    try:
        list(iter_events(["data: not-json\n"]))
    except StreamDecodeError as e:
        print(f"Malformed chunk rejected: raw={e.raw!r}")

    try:
        list(iter_events(['data: {"partial": true}\n']))
    except StreamTruncatedError as e:
        print(f"Truncated stream detected: {e}")


if __name__ == "__main__":
    main()
