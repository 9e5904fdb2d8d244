from stampgen.apps.cli.main import run

run()
