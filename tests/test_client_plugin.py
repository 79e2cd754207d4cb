import os
import shutil
import subprocess
import unittest

PLUGIN_TESTS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "js", "detail_view.test.js")


@unittest.skipUnless(shutil.which("node"), "node is not installed")
class ClientPluginTestCase(unittest.TestCase):
    """Runs the jQuery plugin suite with the node test runner."""

    def test_plugin_suite(self):
        result = subprocess.run(
            ["node", "--test", PLUGIN_TESTS], capture_output=True, text=True, timeout=120
        )
        self.assertEqual(result.returncode, 0, result.stdout + result.stderr)
