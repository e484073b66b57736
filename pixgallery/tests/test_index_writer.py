"""Tests for IndexWriter class."""

from pixgallery.index_writer import IndexWriter

EXPECTED = '''+++
title = "Holiday"
date = "2024-05-17"
categories = ["""photos"""]
cover = "a.jpg"
+++

{{< wrap >}}
{{< photo
    href="a.jpg" largeDim="1000x800"
    smallUrl="a_small.jpg" smallDim="800x640"
    thumbSize="256x256" thumbUrl="a_thm.jpg"
    title=""
    caption=""
    alt=""
    copyright="" >}}
{{< photo
    href="b.jpg" largeDim="2000x1500"
    smallUrl="b_small.jpg" smallDim="800x600"
    thumbSize="256x256" thumbUrl="b_thm.jpg"
    title=""
    caption=""
    alt=""
    copyright="Jane Doe" >}}
{{< photo
    href="c.png" largeDim="500x500"
    smallUrl="c_small.png" smallDim="500x500"
    thumbSize="256x256" thumbUrl="c_small.png"
    title=""
    caption=""
    alt=""
    copyright="" >}}
{{< /wrap >}}
'''


class TestIndexWriter:
    """Tests for IndexWriter class."""

    def test_render(self, sample_manifest):
        """Test the complete page layout."""
        assert IndexWriter().render(sample_manifest) == EXPECTED

    def test_missing_thumbnail_uses_small(self, sample_manifest):
        """Test an entry without thumbnail points at its small derivative."""
        text = IndexWriter().render(sample_manifest)

        assert 'thumbUrl="c_small.png"' in text
        assert 'c_thm.png' not in text

    def test_escape(self):
        """Test quotes and backslashes are escaped."""
        assert IndexWriter.escape('say "hi" \\o/') == 'say \\"hi\\" \\\\o/'

    def test_title_escaped(self, sample_manifest):
        """Test the title cannot break out of its string."""
        sample_manifest.title = 'The "Big" Trip'

        text = IndexWriter().render(sample_manifest)

        assert 'title = "The \\"Big\\" Trip"\n' in text

    def test_write(self, sample_manifest, tmp_path):
        """Test the page is written as UTF-8 with unix newlines."""
        sample_manifest.title = 'Été'
        path = tmp_path / 'index.md'

        IndexWriter().write(sample_manifest, str(path))

        data = path.read_bytes()
        assert b'\r\n' not in data
        assert data.decode('utf-8').startswith('+++\ntitle = "\u00c9t\u00e9"\n')
