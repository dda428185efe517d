import datetime

NAME = "cgroup-memory-manager"
LEVELS = ["INFO", "WARN"]

_level = "INFO"


def now():
    return datetime.datetime.now().strftime("%H-%M-%S-%f")


def set_level(level):
    global _level
    if level not in LEVELS:
        raise ValueError(f"Unrecognized log level '{level}'")
    _level = level


def log(msg, level="INFO"):
    if LEVELS.index(level) < LEVELS.index(_level):
        return
    print(f"{now()} -- {level}: [{NAME}] {msg}", flush=True)


def warn(msg):
    log(msg, level="WARN")
