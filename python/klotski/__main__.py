from klotski.cli import app

app(prog_name="klotski")
