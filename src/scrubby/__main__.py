from scrubby.cli.main import app

app(prog_name="scrubby")
