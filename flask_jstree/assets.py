from markupsafe import Markup

from .const import CONFIG_CSS_URL, CONFIG_JQUERY_URL, CONFIG_JS_URL, CONFIG_THEME
from .templating import render_template


JSTREE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/jstree/3.3.16"
DEFAULT_THEME = "default"
DEFAULT_JQUERY_URL = "https://cdnjs.cloudflare.com/ajax/libs/jquery/3.7.1/jquery.min.js"
DEFAULT_JS_URL = JSTREE_CDN + "/jstree.min.js"


def theme_css_url(theme):
    return "%s/themes/%s/style.min.css" % (JSTREE_CDN, theme)


class JsTreeAssets(object):
    """
    The stylesheet and scripts a page needs for tree widgets.
    Render it once per page, before the widgets scripts run.

    :param jquery_url: set to ``None`` when the page already loads jQuery
    """

    template = "jstree/assets.html"

    def __init__(
        self,
        js_url=DEFAULT_JS_URL,
        css_url=None,
        jquery_url=DEFAULT_JQUERY_URL,
        theme=DEFAULT_THEME,
    ):
        self.js_url = js_url
        self.css_url = css_url or theme_css_url(theme)
        self.jquery_url = jquery_url

    @classmethod
    def from_config(cls, config):
        return cls(
            js_url=config.get(CONFIG_JS_URL, DEFAULT_JS_URL),
            css_url=config.get(CONFIG_CSS_URL),
            jquery_url=config.get(CONFIG_JQUERY_URL, DEFAULT_JQUERY_URL),
            theme=config.get(CONFIG_THEME, DEFAULT_THEME),
        )

    def __call__(self):
        return Markup(
            render_template(
                self.template,
                js_url=self.js_url,
                css_url=self.css_url,
                jquery_url=self.jquery_url,
            )
        )
