import sys
import runpy

# debuggers put the real arguments after "--"
if "--" in sys.argv:
    args = sys.argv[sys.argv.index("--") + 1 :]
else:
    args = sys.argv[1:]

# give Typer a clean argv
sys.argv = ["pyquarto"] + args

# same as: python -m pyquarto ...
runpy.run_module("pyquarto", run_name="__main__")
