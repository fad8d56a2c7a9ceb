"""
Host description appended to a SYSTEM prompt by ``create --with-system-info``.
"""
import getpass
import os
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    username: str
    shell: str
    platform: str
    os_type: str
    version: str
    eol: str


def collect_system_info() -> SystemInfo:
    shell = os.environ.get("SHELL") or os.environ.get("COMSPEC") or "unknown"
    return SystemInfo(
        username=getpass.getuser(),
        shell=shell,
        platform=platform.system().lower(),
        os_type=platform.system(),
        version=platform.version(),
        eol=repr(os.linesep),
    )


def describe(info: SystemInfo) -> str:
    return (
        f" You are using the {info.shell} shell on the {info.platform} ({info.os_type}) platform."
        f" Your OS version is {info.version} and your system is using the {info.eol} EOL."
        " You are an expert on everything that you use and you do not make any mistakes."
    )
