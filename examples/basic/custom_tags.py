"""Custom delimiters and tag names: markup syntax is configuration."""

from subrayado import HEADER_TAG, Markdown, TagDefinition, TextType

stars = (
    TagDefinition("*", "*", TextType.ITALIC),
    TagDefinition("**", "**", TextType.BOLD, nests=frozenset({TextType.ITALIC})),
    HEADER_TAG,
)
md = Markdown(
    tags=stars,
    tag_names={TextType.ITALIC: "i", TextType.BOLD: "b", TextType.HEADER: "h2"},
)

print(md("# Release **notes** for *today*"))
print(md("under_scores are plain text here"))
