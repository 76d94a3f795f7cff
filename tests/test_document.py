import pytest
import yaml
from matrixalg.core.exceptions import DocumentParseError, InvalidArgumentError, PluginNotFoundError
from matrixalg.inout.document import DocumentBackend, DocumentLoader, DocumentNode


def test_builtin_backends_load():
    DocumentLoader.load_plugin("yaml")
    DocumentLoader.load_plugin("XML")        # names are case-insensitive
    DocumentLoader.load_plugin("yaml")       # idempotent
    assert DocumentLoader.has_plugin("xml")


def test_unknown_backend():
    with pytest.raises(PluginNotFoundError, match="Unknown document backend"):
        DocumentLoader.load_plugin("nonexistent")
    with pytest.raises(PluginNotFoundError):
        DocumentLoader.doc("nonexistent")
    with pytest.raises(PluginNotFoundError):
        DocumentLoader("nonexistent")
    assert not DocumentLoader.has_plugin("nonexistent")


def test_documentation_strings():
    assert "PyYAML" in DocumentLoader.doc("yaml")
    assert "ElementTree" in DocumentLoader.doc("xml")


def test_xml_tree(tmp_path):
    path = tmp_path / "doc.xml"
    path.write_text('<root version="2"><item id="a">  hello </item><item id="b"/><other/></root>')
    tree = DocumentLoader("xml").parse(str(path))
    assert tree.name == "root"
    assert tree["version"] == "2"
    assert len(tree) == 3
    items = tree.find_all("item")
    assert [i["id"] for i in items] == ["a", "b"]
    assert items[0].text == "hello"
    assert items[1].text is None
    assert tree.child("other") is not None
    assert tree.child("missing") is None


def test_xml_keep_whitespace(tmp_path):
    path = tmp_path / "doc.xml"
    path.write_text("<root> x </root>")
    tree = DocumentLoader("xml", {"strip_whitespace": False}).parse(path)
    assert tree.text == " x "


def test_yaml_tree(tmp_path):
    path = tmp_path / "doc.yaml"
    data = {"config": {"name": "demo", "enabled": True, "size": 3,
                       "entry": [{"row": 0}, {"row": 1}],
                       "nested": {"depth": 2}}}
    path.write_text(yaml.safe_dump(data))
    tree = DocumentLoader("yaml").parse(str(path))
    assert tree.name == "config"
    assert tree.attributes == {"name": "demo", "enabled": "true", "size": "3"}
    assert [e["row"] for e in tree.find_all("entry")] == ["0", "1"]
    assert tree.child("nested")["depth"] == "2"
    assert tree.value("size") == "3"


def test_yaml_root_named_after_file(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("a: 1\nb: 2\n")
    tree = DocumentLoader("yaml").parse(str(path))
    assert tree.name == "settings"
    assert tree.attributes == {"a": "1", "b": "2"}


def test_yaml_scalar_list(tmp_path):
    path = tmp_path / "tags.yaml"
    path.write_text("tag: [x, y]\nother: 1\n")
    tree = DocumentLoader("yaml").parse(str(path))
    assert [t.text for t in tree.find_all("tag")] == ["x", "y"]


@pytest.mark.parametrize("backend, content", [
    ("xml", "<root><unclosed></root>"),
    ("yaml", "key: [1, 2\n"),
])
def test_malformed_documents(tmp_path, backend, content):
    path = tmp_path / f"bad.{backend}"
    path.write_text(content)
    with pytest.raises(DocumentParseError, match="Malformed"):
        DocumentLoader(backend).parse(str(path))


@pytest.mark.parametrize("backend", ["xml", "yaml"])
def test_missing_file_raises_oserror(tmp_path, backend):
    with pytest.raises(OSError):
        DocumentLoader(backend).parse(str(tmp_path / "missing"))


def test_invalid_options():
    with pytest.raises(InvalidArgumentError, match="Invalid options"):
        DocumentLoader("xml", {"strip_whitespace": "yes"})
    with pytest.raises(InvalidArgumentError, match="Invalid options"):
        DocumentLoader("yaml", {"unknown": 1})


def test_register_custom_backend(tmp_path):
    class LineBackend(DocumentBackend):
        name = "lines"
        doc = "One child per line."

        def parse(self, filename):
            with open(filename) as f:
                return DocumentNode("lines", {}, None,
                                    tuple(DocumentNode("line", {}, l.rstrip("\n")) for l in f))

    DocumentLoader.register(LineBackend)
    assert DocumentLoader.doc("lines") == "One child per line."
    path = tmp_path / "a.txt"
    path.write_text("first\nsecond\n")
    tree = DocumentLoader("lines").parse(str(path))
    assert [c.text for c in tree] == ["first", "second"]


def test_register_rejects_bad_classes():
    with pytest.raises(InvalidArgumentError, match="non-DocumentBackend"):
        DocumentLoader.register(int)

    class Nameless(DocumentBackend):
        def parse(self, filename):
            return DocumentNode("x")

    with pytest.raises(InvalidArgumentError, match="lacks a valid `name`"):
        DocumentLoader.register(Nameless)
