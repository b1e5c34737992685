from resultkit.cli import app

app(prog_name="resultkit")
