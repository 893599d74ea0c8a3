"""Hello: the smallest useful gower app.

Demonstrates regex routes with capture groups, plain text, templates,
JSON, the request stats endpoint and static files.

Run:
    python app.py --port 8000 --debug
or:
    gower run app:app --debug
"""

from pathlib import Path

from gower import App, ServerConfig

HERE = Path(__file__).parent

app = App(
    ServerConfig(
        template_dir=str(HERE / "templates"),
        static_dir=str(HERE / "static"),
    )
)


@app.get(r"/")
def index(ctx):
    ctx.write_template("index.html", {"title": "Hello"})


@app.get(r"/say-hi/([a-zA-Z]+)")
def say_hi(ctx):
    ctx.write("Hi ", ctx.matches[1])


@app.get(r"/add/(\d+)/(\d+)")
def add(ctx):
    a, b = (int(group) for group in ctx.params)
    ctx.write(a, b, "=", a + b)


@app.post(r"/echo")
async def echo(ctx):
    ctx.write_json({"received": await ctx.request.json()})


@app.get(r"/stats")
def stats(ctx):
    ctx.write_json(ctx.stats.snapshot())


if __name__ == "__main__":
    from gower.config import parse_args

    app.config = parse_args(base=app.config)
    app.run()
