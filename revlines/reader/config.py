"""
config = {
        "block_size": args.block_size,
        "encoding": args.encoding or "",
        "errors": "strict",
        "retries": int(args.retries),
        "insecure": args.insecure,
        "log_dir": args.log_dir or "",
        "lines": args.lines,
    }
"""

import dataclasses
import json

DEFAULT_BLOCK_SIZE = 4096


def _dataclass_from_dict(klass_or_obj, d):
    ret = klass_or_obj() if isinstance(klass_or_obj, type) else klass_or_obj
    for k, v in d.items():
        if hasattr(ret, k):
            setattr(ret, k, v)
    return ret


@dataclasses.dataclass
class Config:
    def asdict(self):
        return dataclasses.asdict(self)

    # Scan params
    block_size: int = DEFAULT_BLOCK_SIZE
    encoding: str = ""  # empty means the platform default
    errors: str = "strict"  # bytes.decode() error handler

    # HTTP params
    retries: int = 5
    insecure: bool = False

    # Output params
    log_dir: str = ""  # where errors.log goes, empty disables it
    lines: int = -1  # how many lines the CLI prints, -1 for all


def newConfig(configDict) -> Config:
    return _dataclass_from_dict(Config, configDict)


def loadConfig(configfilename: str, config: Config = None) -> Config:
    """Load config file on top of `config` (or the defaults)"""

    configDict = dataclasses.asdict(config or Config())
    with open(configfilename, encoding="utf-8") as infile:
        configDict.update(json.load(infile))
    return newConfig(configDict)


def saveConfig(config: Config, configfilename: str):
    """Save config file"""

    with open(configfilename, "w", encoding="utf-8") as outfile:
        json.dump(dataclasses.asdict(config), outfile)
