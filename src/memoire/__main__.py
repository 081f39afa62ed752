from memoire.cli import app

app(prog_name="memoire")
