# tilebar

`tilebar` holds two sets of desktop building blocks:

- **system information components**: small functions that each return
  one piece of text about the system (date and time, battery, memory,
  CPU, network, volume and more), ready to be put into a status line, and
- a **tiling layout engine** that models monitors, clients and tags and
  arranges windows with the classic master/stack (`[]=`), monocle (`[M]`)
  and floating (`><>`) layouts.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## System information components

Each component takes one argument (a battery name, a path, an interface,
a format, or an unused value) and returns a string, or `None` when the
value cannot be read. Problems are reported as a line on standard error.

```python
from tilebar.system import datetime
from tilebar.power import battery_perc
from tilebar.memory import ram_perc

parts = [
    datetime("%F %T"),
    battery_perc("BAT0"),
    ram_perc(None),
]
print(" | ".join(part if part is not None else "n/a" for part in parts))
```

Components are grouped by area:

- `tilebar.power`: `battery_perc`, `battery_state`, `battery_remaining`, `temp`
- `tilebar.memory`: `ram_free`, `ram_perc`, `ram_total`, `ram_used`,
  `swap_free`, `swap_perc`, `swap_total`, `swap_used`, `disk_free`,
  `disk_perc`, `disk_total`, `disk_used`, and `parse_meminfo`
- `tilebar.cpu`: `cpu_freq`, `cpu_perc`, `load_avg`, `uptime`, `entropy`,
  and the `CpuMeter` class, `parse_proc_stat` and `format_uptime`
- `tilebar.network`: `ipv4`, `ipv6`, `netspeed_rx`, `netspeed_tx`,
  `wifi_perc`, `wifi_essid`, and the `NetSpeed` class, `rssi_to_perc`
  and `parse_wireless`
- `tilebar.volume`: `vol_perc` (reads an OSS mixer device such as `/dev/mixer`)
- `tilebar.system`: `cat`, `datetime`, `hostname`, `kernel_release`,
  `num_files`, `run_command`, `gid`, `uid`, `username`, and the helpers
  `format_indicators` (caps/num lock text from an LED mask) and
  `get_layout` (layout name from an xkb symbols string)

`cpu_perc`, `netspeed_rx` and `netspeed_tx` compare against the previous
call, so their first call returns `None`.

Sizes are formatted with `tilebar.util.fmt_human`, using base 1000 or 1024
prefixes:

```python
from tilebar.util import fmt_human
fmt_human(1536, 1024)   # '1.5 Ki'
```

## Tiling layout engine

`tilebar.manager.WindowManager` holds the state of a tiling window
manager without any display connection. Windows are plain integer
handles; they are managed, tagged, focused and arranged, and every
client's geometry can be read back:

```python
from tilebar.wmconfig import default_config
from tilebar.manager import WindowManager

wm = WindowManager(default_config(), 1920, 1080, 20)
a = wm.manage(1, 0, 0, 800, 600, "st", "st", "term", None)
b = wm.manage(2, 0, 0, 800, 600, "st", "st", "term", None)
wm.set_mfact(0.05)
wm.zoom()
wm.view(1 << 1)
```

The default configuration (`tilebar.wmconfig.default_config`) has nine
tags, a 2-pixel border, 1-pixel gaps, a master factor of 0.55, one master
client, and rules that float Gimp and send Firefox to tag 9. Layout
functions such as `tilebar.layout.tile` and `tilebar.layout.monocle`, and
the rule and size-hint helpers in `tilebar.rules`, can also be used on
their own.

## What the package does not do

- There is no command-line program: nothing assembles the components into
  a status line on a timer or publishes it anywhere. Combine the
  component functions yourself, as in the example above.
- The window manager does not connect to a display server, grab keys or
  draw a bar. The key and button bindings in `Config` are data only;
  it is up to the caller to turn input events into calls on
  `WindowManager`.