# rkgplayback

Play back Mario Kart Wii ghost files (`.rkg`) as GameCube controller input.

The package reads a ghost's input data, decompressing Yaz1-packed ghosts
when the header says so, and works out the controller state for each frame
of the run: the A, B and L buttons, the analog stick and the D-pad trick
inputs. It also builds the replies a controller gives to the console's
Joybus commands (probe, origin and poll), encoded as the 32-bit words a
line driver would shift out onto the data line.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Reading a ghost

```python
from rkgplayback.rkg import RKGReader

with open("ghost.rkg", "rb") as fh:
    reader = RKGReader(fh.read())

for frame in range(1000):
    pad = reader.calc_frame(frame)
    print(frame, pad.a, pad.b, pad.l, pad.x_stick, pad.y_stick)
```

Frame 0 presses A to dismiss the controller disconnection screen. Frames 1
to 282 are neutral, covering the fade-out, and from frame 283 the recorded
inputs are played back. The reader keeps its own position: asking for the
same frame again gives the same state, and asking for any later frame moves
playback on by exactly one frame, so frames should be asked for in
increasing order. `calc_frame` accepts frames 0 to 65535 and raises
`ValueError` outside that range.

`RKGReader` raises `RKGError` (a `ValueError`) when the data is shorter than
the 0x88-byte file header or when the face, direction and trick sections
run past the end of the input data.

`raw_to_stick` maps a ghost's raw 0–14 stick value to the analog value sent
to the console (128 is centre) and raises `ValueError` for anything else.
`DPad` names the trick directions: `NONE`, `UP`, `DOWN`, `LEFT`, `RIGHT`.

## Pad state

`rkgplayback.padstatus.GCPadStatus` is the 8-byte controller report, a
dataclass whose defaults are the neutral state (sticks at 128, triggers at
0, the padding bit `pad1` set). `to_bytes()` packs it the way it is sent on
the wire and raises `ValueError` if a field does not fit its bits;
`GCPadStatus.from_bytes()` reads 8 bytes back.

## Yaz1

`rkgplayback.yaz1.decompress` unpacks the Yaz1 stream stored in a compressed
ghost: a big-endian 32-bit length followed by one or more blocks, each
starting with `Yaz1`, a big-endian decoded size and eight unused bytes.
`decompress_block(data, offset, size)` unpacks a single block body and
returns the decoded bytes with the number of source bytes it used.
Truncated or malformed data raises `Yaz1Error` (a `ValueError`).

## Answering the console

```python
from rkgplayback.joybus import Command, GhostController, encode_pio
from rkgplayback.rkg import RKGReader

controller = GhostController(RKGReader(data))
probe_words = controller.respond(Command.PROBE)
poll_words = controller.respond(Command.POLL)
```

`GhostController(reader, clock=None)` takes an optional `clock`, a callable
returning the current time in microseconds; without one it uses the
monotonic clock. Playback time starts at the first poll, which is frame 0,
and later polls are turned into frames at 59.94 frames per second
(`frame_at` does this conversion). `pad_status()` returns the
`GCPadStatus` for the current moment.

`respond` takes a command byte and returns the encoded reply words:
`Command.PROBE` (0x00) gives the device identifier, `Command.ORIGIN` (0x41)
the neutral origin report and `Command.POLL` (0x40) the current pad state.
Any other byte raises `UnknownCommand`. `encode_pio` turns any byte string
into such words directly: each bit becomes a data/enable pair, two bytes
fill a word, and a stop pair follows the last byte.

## What it does not do

The package does not talk to a console. It has no driver for a data pin or
state machine, no command-line program and no main loop reading commands
from a line; it produces the reply words, and sending them is left to
whatever hardware or program uses it.