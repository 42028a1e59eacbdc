from checkpick.cli import app

app()
