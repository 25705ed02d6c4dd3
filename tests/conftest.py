"""Shared tree snapshots for the tests.

Offsets are character offsets into ``source``; all sources are ASCII so
they equal byte offsets.
"""

import pytest

from marksight.adapters.yaml_tree import load_trees

# "**bold** and *em* and [text](dest)"
INLINE_SAMPLE = """
source: "**bold** and *em* and [text](dest)"
block:
  type: document
  start: 0
  end: 34
  children:
    - type: paragraph
      start: 0
      end: 34
      children:
        - {type: inline, start: 0, end: 34}
inline:
  type: inline
  start: 0
  end: 34
  children:
    - type: strong_emphasis
      start: 0
      end: 8
      children:
        - {type: emphasis_delimiter, start: 0, end: 1}
        - {type: emphasis_delimiter, start: 1, end: 2}
        - {type: emphasis_delimiter, start: 6, end: 7}
        - {type: emphasis_delimiter, start: 7, end: 8}
    - type: emphasis
      start: 13
      end: 17
      children:
        - {type: emphasis_delimiter, start: 13, end: 14}
        - {type: emphasis_delimiter, start: 16, end: 17}
    - type: inline_link
      start: 22
      end: 34
      children:
        - {type: "[", start: 22, end: 23, named: false}
        - {type: link_text, start: 23, end: 27}
        - {type: "]", start: 27, end: 28, named: false}
        - {type: "(", start: 28, end: 29, named: false}
        - {type: link_destination, start: 29, end: 33}
        - {type: ")", start: 33, end: 34, named: false}
"""

# "> [a](b)\n"
QUOTED_LINK = """
source: "> [a](b)\\n"
block:
  type: document
  start: 0
  end: 9
  children:
    - type: block_quote
      start: 0
      end: 9
      children:
        - {type: block_quote_marker, start: 0, end: 2}
        - type: paragraph
          start: 2
          end: 9
          children:
            - {type: inline, start: 2, end: 8}
inline:
  type: inline
  start: 2
  end: 8
  children:
    - type: inline_link
      start: 2
      end: 8
      children:
        - {type: "[", start: 2, end: 3, named: false}
        - {type: link_text, start: 3, end: 4}
        - {type: "]", start: 4, end: 5, named: false}
        - {type: "(", start: 5, end: 6, named: false}
        - {type: link_destination, start: 6, end: 7}
        - {type: ")", start: 7, end: 8, named: false}
"""

# "# Title\n\npara\n\n## Sub\n"
HEADINGS_DOC = """
source: "# Title\\n\\npara\\n\\n## Sub\\n"
block:
  type: document
  start: 0
  end: 22
  children:
    - type: section
      start: 0
      end: 22
      children:
        - type: atx_heading
          start: 0
          end: 8
          children:
            - {type: atx_h1_marker, start: 0, end: 1}
            - {type: inline, start: 1, end: 7, field: heading_content}
        - type: paragraph
          start: 9
          end: 14
          children:
            - {type: inline, start: 9, end: 13}
        - type: section
          start: 15
          end: 22
          children:
            - type: atx_heading
              start: 15
              end: 22
              children:
                - {type: atx_h2_marker, start: 15, end: 17}
                - {type: inline, start: 17, end: 21, field: heading_content}
inline:
  type: document
  start: 0
  end: 0
"""


@pytest.fixture
def inline_sample():
    return load_trees(INLINE_SAMPLE)


@pytest.fixture
def quoted_link():
    return load_trees(QUOTED_LINK)


@pytest.fixture
def headings_doc():
    return load_trees(HEADINGS_DOC)


@pytest.fixture
def inline_sample_yaml():
    return INLINE_SAMPLE


@pytest.fixture
def headings_doc_yaml():
    return HEADINGS_DOC
