import io
from xml.parsers import expat

from wellformed.output import (
    NAMESPACE_SEPARATOR,
    CanonicalWriter,
    MarkupWriter,
    MetaWriter,
    escape_attribute_value,
    escape_character_data,
)


def canonical(doc, **options):
    out = io.StringIO()
    if options.get("namespaces"):
        parser = expat.ParserCreate(namespace_separator=NAMESPACE_SEPARATOR)
    else:
        parser = expat.ParserCreate()
    CanonicalWriter(out, **options).attach(parser)
    parser.Parse(doc, True)
    return out.getvalue()


def meta(doc, base=None, namespaces=False):
    out = io.StringIO()
    if namespaces:
        parser = expat.ParserCreate(namespace_separator=NAMESPACE_SEPARATOR)
    else:
        parser = expat.ParserCreate()
    if base is not None:
        parser.SetBase(base)
    writer = MetaWriter(out)
    writer.attach(parser)
    writer.start_document()
    parser.Parse(doc, True)
    writer.end_document()
    return out.getvalue()


def test_escape_character_data_markup():
    assert escape_character_data('a&b<c>d"') == "a&amp;b&lt;c&gt;d&quot;"


def test_escape_character_data_whitespace():
    assert escape_character_data("\t\n\r") == "&#9;&#10;&#13;"


def test_escape_plain_text_unchanged():
    assert escape_character_data("hello") == "hello"


def test_escape_attribute_value_stops_at_separator():
    assert escape_attribute_value("urn:x" + NAMESPACE_SEPARATOR + "local") == "urn:x"


def test_canonical_simple_document_unchanged():
    assert canonical('<a b="1">x</a>') == '<a b="1">x</a>'


def test_canonical_sorts_attributes():
    result = canonical('<r z="1" a="2"/>')
    assert result.index('a="2"') < result.index('z="1"')
    assert result.endswith("</r>")


def test_canonical_is_idempotent():
    doc = '<root  z="&amp;1" a="x&#9;y"><?pi some data?>te&lt;xt<e/></root>'
    first = canonical(doc)
    assert canonical(first) == first


def test_canonical_processing_instruction():
    assert "<?t d?>" in canonical("<r><?t d?></r>")


def test_canonical_namespaces():
    result = canonical('<p:e xmlns:p="urn:x" p:k="v"/>', namespaces=True)
    assert result == '<n1:e xmlns:n1="urn:x" n2:k="v" xmlns:n2="urn:x"></n1:e>'


def test_canonical_notations_sorted():
    doc = (
        "<!DOCTYPE d [\n"
        '<!NOTATION b SYSTEM "sb">\n'
        '<!NOTATION a PUBLIC "pa" "sa">\n'
        "]>\n<d/>"
    )
    result = canonical(doc, notations=True)
    assert result == (
        "<!DOCTYPE d [\n"
        "<!NOTATION a PUBLIC 'pa' 'sa'>\n"
        "<!NOTATION b SYSTEM 'sb'>\n"
        "]>\n<d></d>"
    )


def test_canonical_notations_ignored_without_option():
    doc = '<!DOCTYPE d [<!NOTATION b SYSTEM "sb">]><d/>'
    assert "<!NOTATION" not in canonical(doc)


def test_markup_writer_copies_document():
    doc = '<?xml version="1.0"?>\n<!-- c --><a  x="1" >t&amp;<b/></a >'
    out = io.StringIO()
    parser = expat.ParserCreate()
    MarkupWriter(out).attach(parser)
    parser.Parse(doc, True)
    assert out.getvalue() == doc


def test_meta_document_wrapper():
    result = meta("<a/>")
    assert result.startswith("<document>\n")
    assert result.endswith("</document>\n")


def test_meta_elements_and_chars():
    result = meta("<a><b>x</b></a>")
    assert result.count("<starttag") == 2
    assert result.count("<endtag") == 2
    assert '<chars str="x"' in result
    assert result.index('<starttag name="a"') < result.index('<starttag name="b"')


def test_meta_comment_escaped():
    assert 'data="a&lt;b"' in meta("<a><!--a<b--></a>")


def test_meta_attributes_and_id():
    doc = '<!DOCTYPE a [<!ATTLIST a i ID #IMPLIED>]><a i="x" j="y"/>'
    result = meta(doc)
    assert result.count('id="yes"') == 1
    assert '<attribute name="i" value="x" id="yes"/>' in result
    assert "</starttag>" in result


def test_meta_uri_from_base():
    assert ' uri="doc.xml"' in meta("<a/>", base="doc.xml")
    assert "uri=" not in meta("<a/>")


def test_meta_namespace_declarations():
    result = meta('<p:a xmlns:p="urn:x"/>', namespaces=True)
    assert '<startns prefix="p" ns="urn:x"/>' in result
    assert '<endns prefix="p"/>' in result


def test_meta_cdata_section():
    result = meta("<a><![CDATA[x]]></a>")
    assert result.index("<startcdata") < result.index("<endcdata")