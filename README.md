# ocypod

`ocypod` holds building blocks for a job queue for long running tasks that
keeps its data in Redis. It needs only the Python standard library, Python 3.11
or later.

It provides:

- `ocypod.duration`: durations in whole seconds, written as human readable
  text (`"2m 15s"`, `"3h27m"`, `"14days 10h 17m 36s"`) and stored in Redis
  as a number of seconds.
- `ocypod.timestamp`: UTC timestamps, stored in Redis as RFC 3339 strings.
- `ocypod.job_field`: the names of the fields in a job's Redis hash.
- `ocypod.queue_settings`: the per-queue settings for timeouts, expiry and retries.
- `ocypod.errors`: the error classes, each tied to an HTTP status.
- `ocypod.config`: configuration read from TOML. `${VAR}` and `${VAR=default}`
  are filled in from environment variables.
- `ocypod.health`: health reports built from the reply to a Redis `PING`.

## Durations

```python
from ocypod.duration import Duration, format_duration, parse_duration

format_duration(135)        # "2m 15s"
format_duration(1246656)    # "14days 10h 17m 36s"
parse_duration("3h27m")     # 12420

timeout = Duration.parse("3h27m")
str(timeout)                # "3h 27m"
timeout.to_redis()          # 12420
Duration.from_redis(b"12420") == timeout   # True
Duration.parse("0s").is_zero()             # True
```

Text that cannot be parsed raises `ValueError`. Every number needs a unit,
for example `10s`, `5m`, `2h`, `3days` or `1week`.

## Timestamps

```python
from ocypod import timestamp

started = timestamp.now()                 # timezone-aware, UTC
stored = timestamp.to_redis(started)      # RFC 3339 string
timestamp.from_redis(stored) == started   # True
timestamp.seconds_since(timestamp.now(), started)   # whole seconds
```

`to_redis` rejects naive datetimes, and `from_redis` rejects strings that
have no UTC offset.

## Job fields

```python
from ocypod.job_field import JobField

JobField.all_fields()                  # every field, in declaration order
JobField.from_redis(b"retry_delays")   # JobField.RETRY_DELAYS
JobField.STATUS.to_redis()             # "status"
```

A name that is not a job field raises `ValueError("Invalid job field")`.

## Queue settings

```python
from ocypod.queue_settings import QueueSettings

settings = QueueSettings.from_dict({
    "timeout": "3m",
    "heartbeat_timeout": "90s",
    "expires_after": "90m",
    "retries": 4,
    "retry_delays": ["10s", "1m", "5m"],
})
settings.to_dict()
# {"timeout": "3m", "heartbeat_timeout": "1m 30s", "expires_after": "1h 30m",
#  "retries": 4, "retry_delays": ["10s", "1m", "5m"]}
```

A setting that is left out takes its default: a 5 minute timeout, no
heartbeat timeout, expiry 5 minutes after the job ends, no retries and no
retry delays. Values of the wrong kind raise `ocypod.errors.BadRequest`.

`QueueSettings.from_redis(values)` builds settings from the five stored hash
values, in the order timeout, heartbeat timeout, expiry, retries, retry
delays. The retry delays are stored as a JSON list and may be missing.

## Configuration

```python
from ocypod.config import Config, interpolate_env

raw = '''
[server]
port = ${OCYPOD_PORT=8023}
log_level = "${OCYPOD_LOG_LEVEL=info}"

[redis]
url = "redis://${REDIS_HOST}:6379"

[queue.default]
'''

text = interpolate_env(raw, {"REDIS_HOST": "localhost"})
config = Config.from_toml(text)
config.server_addr()   # "127.0.0.1:8023"
config.redis_url()     # "redis://localhost:6379"
config.queue           # {"default": QueueSettings()}
```

If `environ` is left out, `interpolate_env` reads `os.environ`. A value set in
the environment wins over a default. If a variable has no value and no
default, `ConfigError` is raised, and its message names each missing variable
once, in sorted order.

`Config.from_file(path)` reads a file, fills in the environment variables and
parses the result. `parse_config_from_cli_args(argv)` takes an optional
config file path as its one positional argument. With no path it uses the
defaults. If the file is invalid, or `shutdown_timeout` is longer than 65535
seconds, it prints the reason to standard error and exits with status 1.

Defaults for the `[server]` table:

| setting | default |
|---|---|
| `host` | `127.0.0.1` |
| `port` | `8023` |
| `threads` | unset |
| `max_body_size` | unset |
| `timeout_check_interval` | `30s` |
| `retry_check_interval` | `60s` |
| `expiry_check_interval` | `5m` |
| `shutdown_timeout` | unset |
| `next_job_delay` | unset |
| `log_level` | `info` |

`max_body_size` is a size such as `"256kB"` or `"1 MiB"`, parsed by
`parse_human_size`. `log_level` is one of `error`, `warn`, `info`, `debug` or
`trace`, in any case. `parse_log_level` turns it into a `logging` level number,
and `trace` becomes 5. In the `[redis]` table, `url` defaults to
`redis://127.0.0.1` and `key_namespace` to the empty string.

## Health reports

```python
from ocypod.health import Health, check_health

Health.healthy().to_json()              # '{"status":"healthy"}'
Health.from_error("message").to_json()  # '{"status":"unhealthy","error":"message"}'

check_health(lambda: b"PONG")           # Health.healthy()
```

`check_health(ping)` calls `ping` and turns the reply into a `Health`. A reply
of `PONG` gives a healthy report. Any other reply, or any exception raised by
`ping`, gives an unhealthy report with a message. The one exception that is
passed on is `RedisConnectionError`, which means no connection was available.

## Errors

All errors derive from `ocypod.errors.OcyError`. Each has an HTTP
`status_code`. `error_response()` returns that status, a `text/html` content
type header and the message as the body.

| error | status |
|---|---|
| `NoSuchQueue`, `NoSuchJob` | 404 |
| `BadRequest` | 400 |
| `Conflict` | 409 |
| `RedisConnectionError` | 503 |
| `RedisFailure`, `InternalError`, `ParseError` | 500 |

## What this package does not do

This package does not run an HTTP server, and it does not connect to Redis.
It has no job statuses, no job creation or update requests, and no reading of
job metadata back from Redis. It cannot check whether a job has timed out,
should expire or should be retried, and it keeps no server statistics. The
pieces above are the parts such a service would build on.

## Running the tests

Install the package with its `test` extra and run `pytest`.