# tuispot

`tuispot` holds the parts of a terminal music client that need no screen
and no audio device:

- a small command language, as typed at a `:` prompt (`tuispot.command`);
- library models: tracks, episodes, artists, albums, shows and playlists
  (`tuispot.model`);
- a play queue with repeat and shuffle that drives any player object
  (`tuispot.queue`);
- a thread-safe event channel for a main loop (`tuispot.events`);
- configuration read from TOML and user state kept in CBOR
  (`tuispot.config`, `tuispot.serialization`).

It is a library; it installs no command.

## Commands

`tuispot.command.parse` turns a command line into a list of `Command`
objects. Several commands go on one line, separated by `;`; a literal
`;` is written as `;;`. If any command on the line is unknown or
malformed, `parse` raises `ValueError`.

```python
from tuispot.command import parse

commands = parse("seek +1000; volup 5")
print([str(c) for c in commands])   # ['seek +1000', 'volup 5']
```

`str()` of a command gives its command-line form back, with `;` escaped
as `;;`. Each `Command` has a `kind` (a `CommandKind`) and a tuple of
`args`.

Aliases are understood: `q` and `x` mean `quit`; `pause`, `toggleplay`
and `toggleplayback` mean `playpause`; `loop` means `repeat`.

| Command | Meaning |
| --- | --- |
| `playpause`, `stop`, `next`, `previous`, `play`, `queue`, `playnext`, `clear` | playback and queue |
| `seek +5000`, `seek -5000`, `seek 30000` | relative or absolute seek, in milliseconds |
| `volup [n]`, `voldown [n]` | change volume by `n` steps (default 1) |
| `repeat [list\|playlist\|queue\|track\|once\|none\|off]` | set repeat, or cycle it with no argument |
| `shuffle [on\|off]` | set shuffle, or toggle it with no argument |
| `move up\|down\|left\|right [n]`, `move top\|bottom\|leftmost\|rightmost\|playing` | move the selection |
| `shift up\|down [n]` | move the selected queue entry |
| `sort title\|duration\|artist\|album\|added [a\|asc\|ascending\|d\|desc\|descending]` | sort a playlist |
| `search <terms>`, `jump <terms>` | search, or jump within a list |
| `focus <screen>`, `open`, `share`, `similar` (`selected\|current`), `goto album\|artist`, `back` | navigation |
| `save [queue]`, `delete`, `newplaylist <name>`, `insert [url]`, `update` | library editing |
| `help`, `reload`, `redraw`, `logout`, `noop` | miscellaneous |

## Models

`Track`, `Episode`, `Artist`, `Album`, `Show` and `Playlist` are
dataclasses. Each has `to_dict()` and `from_dict()` for plain data that
JSON, TOML or CBOR can hold; `from_dict` raises `ValueError` when a
required field is missing.

```python
from tuispot.model.track import Track

track = Track(id="abc", uri="spotify:track:abc", title="Song",
              track_number=1, disc_number=1, duration=215000, artists=["Band"])
print(str(track), track.duration_str())   # Band - Song 03:35
```

A *playable* is a `Track` or an `Episode`. `tuispot.model.playable`
offers `playable_to_dict` and `playable_from_dict`, which tag the data
with `"type": "Track"` or `"type": "Episode"`, and `duration_str`.

`Playlist.sort(key, direction)` orders the loaded tracks by a `SortKey`
and `SortDirection`; sorting by artist ignores case and leading "the".
`Album.sort_key()` gives the key saved albums are ordered by.

## Queue

`tuispot.queue.Queue(player, config, rng=None)` keeps the list of
playables, the current index and, when shuffle is on, a random play
order. On creation it restores the queue saved in the user state. It
drives any object that implements the `Player` protocol (`load`,
`update_track`, `pause`, `seek`, `stop`, `toggleplayback`, `preload`,
`status`), so a real audio back end or a stand-in will do.

It supports `append`, `append_next`, `insert_after_current`, `remove`,
`shift`, `play`, `next`, `previous`, `toggleplayback`, `stop`, `clear`
and `handle_event` (for `QueueEvent.PRELOAD_TRACK_REQUEST`). The
`repeat` and `shuffle` properties are kept in the user state. At the end
of the list `next` wraps around with `RepeatSetting.REPEAT_PLAYLIST`,
and with `RepeatSetting.REPEAT_TRACK` it replays the same entry unless
the skip is manual.

## Events

`tuispot.events.EventManager(notify=None)` is an unbounded, thread-safe
channel of `Event` objects. `send` queues an event and calls `notify`;
`trigger` calls `notify` alone; `messages()` yields pending events
without waiting.

## Configuration

The configuration file is TOML, by default `config.toml` in the per-user
configuration directory. A base directory may be given instead, in which
case files go under `.config` and `.cache` inside it (see `config_path`
and `cache_path`). A missing configuration file is created empty; one
that cannot be parsed raises `SerializationError`.

```toml
initial_screen = "queue"
use_nerdfont = false
shuffle = true
repeat = "playlist"

[keybindings]
"Ctrl+r" = "repeat"

[theme]
primary = "light white"
highlight_bg = "dark blue"
```

```python
from tuispot.config import Config

config = Config("config.toml", "/tmp/tuispot-home")
config.update_state(lambda state: setattr(state, "volume", 30000))
config.save_state()
```

`config.values` holds the settings as `ConfigValues`; `config.reload()`
reads the file again. User state — volume, shuffle, repeat, the saved
queue and per-playlist sort orders — is a `UserState` stored in
`userstate.cbor` next to the configuration. A missing or unreadable
state file is replaced by defaults. `shuffle` and `repeat` set in the
configuration file override the saved state.

## What it does not do

- There is no screen: no views, no command prompt, no help page.
- Key bindings are only stored as text in `ConfigValues.keybindings`;
  nothing turns key names into key events or supplies a default key map.
- Parsed commands are not carried out; acting on a `Command` is left to
  the program using the package.
- There is no audio playback and no connection to a streaming service:
  the queue only calls the `Player` it is given, and nothing fetches or
  syncs a user's library.