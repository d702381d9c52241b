import os
import sys
import tempfile
import textwrap
import unittest

from responsebot.commands.registry import CommandRegistry

COMMAND_MODULE = textwrap.dedent(
    """
    from responsebot.commands.command import Command
    from responsebot.models.reply import Reply


    async def execute(message, args, ctx):
        return Reply.text({reply!r})


    command = Command(name={name!r}, description="test", execute=execute, aliases={aliases!r})
    """
)


class TestBuiltinCommands(unittest.TestCase):

    def setUp(self):
        self.registry = CommandRegistry().load()

    def test_all_builtins_load(self):
        names = [command.name for command in self.registry.commands()]
        self.assertEqual(
            names,
            ["addresponse", "editresponse", "help", "ping", "removeresponse", "responsepanel"],
        )
        self.assertEqual(len(self.registry), 6)

    def test_aliases_resolve_case_insensitively(self):
        self.assertEqual(self.registry.get("RP").name, "responsepanel")
        self.assertEqual(self.registry.get("modresponse").name, "editresponse")
        self.assertEqual(self.registry.get("deleteresponse").name, "removeresponse")
        self.assertEqual(self.registry.get("h").name, "help")
        self.assertEqual(self.registry.get("Pong").name, "ping")
        self.assertIn("AddResponse", self.registry)

    def test_unknown_name(self):
        self.assertIsNone(self.registry.get("nope"))
        self.assertNotIn("nope", self.registry)


class TestCommandDiscovery(unittest.TestCase):

    package_name = "registry_fixture_commands"

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.package_dir = os.path.join(self.tmp.name, self.package_name)
        os.makedirs(self.package_dir)
        self.write("__init__.py", "")
        self.write("alpha.py", COMMAND_MODULE.format(name="alpha", reply="a", aliases=("al",)))
        self.write("no_command.py", "value = 1\n")
        self.write("broken.py", "raise RuntimeError('cannot import')\n")
        sys.path.insert(0, self.tmp.name)

    def tearDown(self):
        sys.path.remove(self.tmp.name)
        for name in list(sys.modules):
            if name == self.package_name or name.startswith(self.package_name + "."):
                del sys.modules[name]
        self.tmp.cleanup()

    def write(self, filename: str, source: str):
        with open(os.path.join(self.package_dir, filename), "w") as f:
            f.write(source)

    def test_invalid_modules_are_skipped(self):
        with self.assertLogs("responsebot.commands.registry", level="INFO") as logs:
            registry = CommandRegistry(self.package_name).load()

        self.assertEqual([command.name for command in registry.commands()], ["alpha"])
        self.assertEqual(registry.get("AL").name, "alpha")
        output = "\n".join(logs.output)
        self.assertIn("Failed loading command module registry_fixture_commands.broken", output)
        self.assertIn("Skipping invalid command module registry_fixture_commands.no_command", output)

    def test_reload_picks_up_new_modules(self):
        registry = CommandRegistry(self.package_name).load()
        self.assertNotIn("beta", registry)

        self.write("beta.py", COMMAND_MODULE.format(name="beta", reply="b", aliases=()))
        registry.reload()

        self.assertIn("beta", registry)
        self.assertEqual(len(registry), 2)

    def test_shadowed_name_is_reported(self):
        self.write("zeta.py", COMMAND_MODULE.format(name="zeta", reply="z", aliases=("alpha",)))

        with self.assertLogs("responsebot.commands.registry", level="WARNING") as logs:
            registry = CommandRegistry(self.package_name).load()

        self.assertEqual(registry.get("alpha").name, "zeta")
        self.assertTrue(any("shadows alpha" in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
