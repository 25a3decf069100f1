# gameforge

Core building blocks for a small game engine, written in plain Python with
numpy for the maths.

## What is inside

- `gameforge.events`: `EventType`, `EventContext` (a 16-byte payload that can
  be read and written as integers or floats of several widths through
  `view`, `get` and `set`) and `EventSystem`, which keeps named listeners per
  event type and dispatches to them in registration order with `fire`.
- `gameforge.input`: `Keys`, `Buttons`, `MousePosition` and `InputSystem`,
  which tracks current and previous keyboard and mouse state and fires
  `KEY_PRESSED`, `KEY_RELEASED`, `MOUSE_BUTTON_PRESSED`,
  `MOUSE_BUTTON_RELEASED`, `MOUSE_MOVED` and `MOUSE_SCROLLED` events.
- `gameforge.clock`: `absolute_time()` and a `Clock` with `start`, `stop`,
  `update` and the `elapsed` and `start_time` properties. A custom time
  source can be passed in.
- `gameforge.logger`: `LogLevel`, a `Logger` that writes `[LEVEL]: ` prefixed
  lines to stdout (FATAL and ERROR to stderr) and optionally appends them to a
  log file, `report_assertion_failure`, and `ensure`, which logs and raises
  `AssertionFailure` when its condition is false.
- `gameforge.filesystem`: `FileMode`, `File` (usable as a context manager),
  `open_file`, `file_exists` and `open_xml` (returns an
  `xml.etree.ElementTree.ElementTree`).
- `gameforge.strings`: `format_string` (printf-style, C length modifiers
  accepted), `parse_vector`, `parse_float`, `parse_int`, `parse_uint`,
  `parse_bool`, `trim`/`ltrim`/`rtrim`, `mid_string`, `split_string`,
  `string_iequals` and path helpers.
- `gameforge.freelist`: a first-fit `Freelist` offset allocator of
  `FreelistNode` blocks; raises `FreelistFullError` when nothing fits.
- `gameforge.transform`: quaternion helpers (`quat_identity`,
  `quat_from_euler`, `quat_multiply`, `quat_rotate`, `quat_to_mat4`),
  `translation_matrix`, `scale_matrix` and a hierarchical `Transform` with
  `local()` and `world()` matrices.
- `gameforge.render_types`: `BuiltinRenderpasses`, `Vertex3D` (equality
  within a float epsilon), `Vertex2D`, `GeometryRenderData` and
  `RenderPacket`.
- `gameforge.camera`: `perspective`, `orthographic` and a `Camera` with
  movement, yaw/pitch/roll (pitch clamped to ±89°), a view matrix rebuilt in
  `on_update`, and perspective and UI projections rebuilt in `on_resize`.
- `gameforge.vkresult`: `VkResult` codes, `is_vulkan_result_success`,
  `vulkan_result_string`, `check` and `VulkanError`.

## Installing

```
pip install .
```

## Examples

```python
from gameforge.events import EventSystem, EventType
from gameforge.input import InputSystem, Keys

events = EventSystem.initialize()
pressed = []
events.register(
    EventType.KEY_PRESSED,
    "demo",
    lambda type, ctx: pressed.append(ctx.get("u16", 0)) or True,
)

inputs = InputSystem.initialize(events)
inputs.process_key(Keys.A, True)
assert inputs.is_key_down(Keys.A)
assert pressed == [Keys.A]
```

```python
from gameforge.freelist import Freelist

heap = Freelist(1024)
block = heap.allocate_block(256)
print(heap.free_space())   # 768
heap.free_by_offset(block.offset)
print(heap.free_space())   # 1024
```

```python
from gameforge.vkresult import VkResult, vulkan_result_string

print(vulkan_result_string(VkResult.ERROR_DEVICE_LOST))  # VK_ERROR_DEVICE_LOST
```

## What it does not do

This is a library of engine parts only. It opens no window, reads no real
keyboard or mouse (input is fed in through the `process_*` methods), and has
no renderer or GPU backend: the render types, camera matrices and `VkResult`
helpers are data and maths for such a backend to use. There is no command
to run.

## Running the tests

```
pip install .[test]
pytest
```