import importlib
import logging
import pkgutil
import sys
from typing import Dict, List, Optional

from responsebot.commands.command import Command

logger = logging.getLogger(__name__)

BUILTIN_PACKAGE = "responsebot.commands.builtin"


class CommandRegistry:
    """Maps command names and aliases to commands found in a package.

    Each module in the package must expose a module-level `command`. Loading
    happens on `load()` and again on `reload()`; nothing watches the filesystem.
    """

    def __init__(self, package: str = BUILTIN_PACKAGE):
        self.package = package
        self._commands: Dict[str, Command] = {}

    def load(self) -> "CommandRegistry":
        self._commands = self._discover(reload_modules=False)
        return self

    def reload(self) -> "CommandRegistry":
        """Re-imports every command module and swaps in the new mapping."""
        logger.info(f"Reloading commands from {self.package}")
        self._commands = self._discover(reload_modules=True)
        return self

    def _import(self, module_name: str, reload_modules: bool):
        if reload_modules and module_name in sys.modules:
            return importlib.reload(sys.modules[module_name])
        return importlib.import_module(module_name)

    def _discover(self, reload_modules: bool) -> Dict[str, Command]:
        if reload_modules:
            importlib.invalidate_caches()
        package = self._import(self.package, reload_modules)

        commands: Dict[str, Command] = {}
        for module_info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
            module_name = f"{self.package}.{module_info.name}"
            try:
                module = self._import(module_name, reload_modules)
            except Exception:
                logger.exception(f"Failed loading command module {module_name}")
                continue

            command = getattr(module, "command", None)
            if not isinstance(command, Command):
                logger.warning(f"Skipping invalid command module {module_name}")
                continue

            for name in command.names:
                key = name.lower()
                if key in commands and commands[key] is not command:
                    logger.warning(
                        f"Command name {key} from {module_name} shadows {commands[key].name}"
                    )
                commands[key] = command
            logger.info(f"Loaded command {command.name}")

        return commands

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name.lower())

    def commands(self) -> List[Command]:
        """Distinct commands sorted by name."""
        unique = {id(command): command for command in self._commands.values()}
        return sorted(unique.values(), key=lambda command: command.name)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._commands

    def __len__(self) -> int:
        return len(self.commands())
