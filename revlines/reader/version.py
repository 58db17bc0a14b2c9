__VERSION__ = "0.1.0"


def getVersion():
    return __VERSION__
