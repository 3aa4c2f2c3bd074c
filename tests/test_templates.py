import pytest

from pagesmith.config import SiteConfig
from pagesmith.content import MenuEntry, PageRecord, SiteModel
from pagesmith.errors import LayoutRenderError
from pagesmith.templates import TemplateEngine, page_variables


NAV_LAYOUT = (
    "<title>{{ title }} | {{ site.name }}</title>"
    "<ul>{% for item in nav %}"
    "<li{% if item.path == path %} class=\"active\"{% endif %}>"
    "<a href=\"{{ site.base_url }}/{{ item.path }}\">{{ item.title }}</a></li>"
    "{% endfor %}</ul>"
    "{{ content }}"
)


def make_model() -> SiteModel:
    home = PageRecord(
        layout="default.html",
        title="Home",
        path="",
        content="<h1>Hi</h1>",
        output_name="index.html",
    )
    about = PageRecord(
        layout="default.html",
        title="About",
        path="about",
        content="<p>About <b>us</b></p>",
        output_name="index.html",
    )
    model = SiteModel(pages={"": home, "about": about})
    model.nav.extend([MenuEntry("Home", ""), MenuEntry("About", "about")])
    return model


def test_renders_layout_without_escaping(tmp_path):
    (tmp_path / "default.html").write_text(NAV_LAYOUT, encoding="utf-8")
    config = SiteConfig({"site": {"name": "Site", "base_url": "http://x"}})
    model = make_model()
    engine = TemplateEngine(tmp_path)

    about = model.pages["about"]
    html = engine.render("default.html", page_variables(config, about, model))

    assert "<title>About | Site</title>" in html
    assert "<p>About <b>us</b></p>" in html
    assert '<li class="active"><a href="http://x/about">About</a></li>' in html
    assert '<li><a href="http://x/">Home</a></li>' in html


def test_page_variables_contain_every_section():
    config = SiteConfig({"deploy": {"branch": "master"}})
    model = make_model()
    variables = page_variables(config, model.pages[""], model)
    assert set(variables) == {
        "site", "author", "source", "title", "path", "content", "nav", "menus",
    }
    assert variables["source"] == {"branch": "master"}
    assert variables["nav"] == model.nav
    assert variables["menus"] == {"nav": model.nav}


def test_undefined_variable_is_fatal(tmp_path):
    (tmp_path / "default.html").write_text("{{ missing_thing }}", encoding="utf-8")
    engine = TemplateEngine(tmp_path)
    with pytest.raises(LayoutRenderError) as excinfo:
        engine.render("default.html", {"title": "x"})
    assert excinfo.value.layout == "default.html"
    assert "Undefined variable" in excinfo.value.message


def test_syntax_error_names_layout(tmp_path):
    (tmp_path / "broken.html").write_text("{% for x in %}", encoding="utf-8")
    engine = TemplateEngine(tmp_path)
    with pytest.raises(LayoutRenderError) as excinfo:
        engine.render("broken.html", {})
    assert "broken.html" in excinfo.value.message
    assert "syntax error" in excinfo.value.message


def test_missing_layout(tmp_path):
    engine = TemplateEngine(tmp_path)
    with pytest.raises(LayoutRenderError) as excinfo:
        engine.render("default.html", {})
    assert "Layout not found" in excinfo.value.message


def test_pygments_css_global(tmp_path):
    (tmp_path / "default.html").write_text("{{ pygments_css() }}", encoding="utf-8")
    html = TemplateEngine(tmp_path).render("default.html", {})
    assert ".highlight" in html
