from jinja2 import Environment, PackageLoader, select_autoescape

from .utils import dumps_js


jinja_env = Environment(
    loader=PackageLoader("flask_jstree", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
jinja_env.filters["tojs"] = dumps_js


def render_template(template, **context):
    return jinja_env.get_template(template).render(**context)
