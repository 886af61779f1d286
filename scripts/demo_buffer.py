import os
from typing import List

from ringbuf.core import log
from ringbuf.core.buffer import RingBuffer, BufferEmptyError, BufferFullError


def main(capacity: int = 5) -> List[int]:
    log.setup()
    lg = log.get("demo")
    buf: RingBuffer[int] = RingBuffer(int(os.getenv("RINGBUF_CAPACITY", capacity)), name="demo.buffer")

    # fill to the brim, one extra push bounces
    for i in range(1, buf.capacity + 2):
        try:
            buf.push(i)
            lg.info("push %d -> len=%d", i, len(buf))
        except BufferFullError:
            lg.info("push %d rejected (full, cap=%d)", i, buf.capacity)

    popped: List[int] = []
    while True:
        try:
            popped.append(buf.pop())
        except BufferEmptyError:
            lg.info("drained: %s", popped)
            return popped


if __name__ == "__main__":
    main()
