from promptsql.main import run

run()
