# coinflow

`coinflow` is a library for working with a stream of market trades. It chains
processing stages over trade signals, records model signals and decides when one
has been confirmed, turns trades into training vectors, and forecasts the
direction of the price trend with polynomial fits. User text commands can be
checked and parsed to adjust it while it runs.

## Installation

```
pip install .
```

`pip install .[test]` also installs pytest for running the tests.

## Modules

### `coinflow.api`

- `coinflow.api.command`: `Command` (id, user, content) and its
  `validate(users, commands, *validators)`, which checks the sender and the
  command word and returns `(command_word, values)`, one value per validator.
  A failed check raises `ValidationError` (a `ValueError`). Filters: `any_user()`,
  `contains(*values)`. Validators: `any_value()`, `not_empty()`, `one_of(*values)`,
  `integer()` and `floating()` (an empty argument parses as zero).
  `command_from_message` and `new_command` build commands.
- `coinflow.api.message`: `Message` with chaining `reply_to`, `add_line` and
  `reference_time`; `error_message(txt)` prefixes the text with `ERROR:`.
- `coinflow.api.trigger`: `ConsumerKey`, `Trigger` with chaining `with_id`,
  `with_description`, `with_timeout`, `with_defaults`; `new_trigger(key)` uses the
  key's id or a fresh UUID.
- `coinflow.api.events`: `Signal` (`new_signal`, `create`, `for_coin`, `with_id`,
  `with_content`), `Block` (a pair of queues), and the stop conditions `counter`,
  `until` and `non_stop`.
- `coinflow.api.interfaces`: the abstract classes `Client`, `Exchange` and `User`,
  the records `Query` and `Pair`, and `reply(channel, user, message, err)`, which
  adds the error to the message, if any, and sends it.

### `coinflow.processor`

- `coinflow.processor.pipeline`: a stage is a function from an iterable of
  `TradeSignal` to an iterator of them. `process(name, fn)` and
  `process_with_close(name, fn, shutdown)` call `fn` on each trade, log any error
  it raises and pass the trade on; `void` and `no_process` only pass trades on.
  `deriv()` returns an enrichment that sets `tick.move` (velocity and momentum)
  from the last two trades. `audit` and `error` format lines for the user.
- `coinflow.processor.strategy`: `Strategy(config, max_lag=5 minutes)` keeps the
  latest signal per coin. `evaluate(tick, signal, config)` returns
  `(signal, key, open)` once the signal has waited its segment's buffer time,
  or `None`. `is_live`, `reset`, `set_gap`, `set_precision_threshold`,
  `enable_ml`/`is_enabled_ml` and `enable_trader`/`is_enabled_trader` adjust and
  read the configuration.

### `coinflow.ml`

- `coinflow.ml.model.vector`: `Type` (`NONE`, `BUY`, `SELL`, with `inverse()`),
  `Key`, `Level`, `Tick`, `TradeSignal`, `Meta`, `Vector` and coin names such as
  `BTC` and `ALL_COINS`.
- `coinflow.ml.model.schema`: `Config`, `Segments`, `Stats`, `Trader`, `Model`,
  `Detail`, `Option`, `Buffer`, `Position`, `Signal`, `Performance`, plus
  `add_config`, `new_config`, `evolve_as_int`, `evolve_float` and `network_type`.
- `coinflow.ml.defaults`: `coin_config`, `with_config`, `config(*coins)` (a set of
  default coins when none are given), `default_config`, `for_coin`, `config_key`,
  `model_config` and `trader_config`.
- `coinflow.ml.collector`: `Collector(config, inp, out)`; `push(trade)` returns
  the vectors the trade completes. `trend`, `collect_stats` and
  `split_on_trend(gap)` pick the features; `fit(xx, yy, *degrees)` returns the
  leading coefficient of a least-squares fit per degree.
- `coinflow.ml.performance`: `Performance.record(reality, prediction)` classifies
  a prediction as an `Outcome` and counts it; `value(lazy)` gives hits per loss.
  `has_trigger(out)` tells whether any prediction is non-zero.
- `coinflow.ml.net.dataset`: `DataSet`, a sliding window of inputs and outputs,
  and helpers such as `strip`, `quantify`, `quantify_all`, `converge`.
- `coinflow.ml.net.poly`: `Polynomial`, which fits its recent trend values and
  predicts 1, -1 or 0 for the direction ahead.
- `coinflow.ml.net.multi`: `MultiNetwork`, which predicts a value only when all
  its members agree.
- `coinflow.ml.net.network`: `BaseNetwork`, which trains, scores and queries each
  network on every vector once its window is full; `new_network`,
  `base_network_constructor`, `Tracker`, `Stats`, `Performance` and the `Network`
  protocol.

## Examples

Parsing a user command:

```python
from coinflow.api.command import Command, any_user, contains, one_of, any_value, floating

cmd = Command(id=1, user="alice", content="?ml start BTC 15")
word, (action, coin, minutes) = cmd.validate(
    any_user(), contains("?ml"), one_of("start", "stop"), any_value(), floating()
)
# word == "?ml", action == "start", coin == "BTC", minutes == 15.0
```

Chaining stages and collecting vectors:

```python
from coinflow.ml.collector import Collector, trend
from coinflow.ml.defaults import config
from coinflow.processor.pipeline import deriv, process

collector = Collector(config("BTC"), trend, trend)
vectors = []
stage = process("collect", lambda trade: vectors.extend(collector.push(trade)))

enrich = deriv()
for trade in stage(enrich(t) for t in trades):  # trades: an iterable of TradeSignal
    pass
```

## What it does not do

- It does not connect to any exchange or chat service: `Client`, `Exchange` and
  `User` are abstract and have no implementations here.
- It has no command-line program and no storage; nothing is written to disk, and
  `Polynomial.save`/`load` keep their history in memory only.
- There is no time-based buffering of trades into interval signals; stages see
  trades as they come.
- `new_network` creates only polynomial networks and raises `ValueError` for other
  types. The segments built by `default_config` also list GRU and HMM models, so
  `base_network_constructor` cannot build a network from them as they are; use
  segments whose models are all of type `POLY_KEY`.