"""Built-in document shown when storage has nothing saved."""

SAMPLE_DOCUMENT = """# Markdown Editor

Welcome! This editor renders a live preview with syntax highlighting, math,
Mermaid diagrams and a generated table of contents.

[TOC]

## Text styles

This is **bold**, this is *italic*, and this is ~~struck through~~.

You can combine them: ***bold italic***

## Lists

### Unordered
- First item
- Second item
  - Nested 2.1
  - Nested 2.2
- Third item

### Ordered
1. Step one
2. Step two
3. Step three

### Tasks
- [x] Finished task
- [ ] Open task
- [ ] Another open task

## Links and quotes

Here is [a link](https://github.com).

> A quoted paragraph.
>
> Quotes can span several paragraphs.

## Code

### Inline
Call `print()` to write output.

### Blocks

```python
def fibonacci(n):
    if n <= 1:
        return n
    return fibonacci(n - 1) + fibonacci(n - 2)

print(fibonacci(10))  # 55
```

## Tables

| Feature | Supported | Notes |
|---------|-----------|-------|
| Markdown | yes | Core syntax |
| Highlighting | yes | Many languages |
| Math | yes | Dollar syntax |
| Mermaid | yes | Diagrams |

## Math

### Inline
Mass-energy equivalence: $E = mc^2$

### Block

$$
\\frac{-b \\pm \\sqrt{b^2 - 4ac}}{2a}
$$

## Mermaid

```mermaid
graph TD
    A[Start] --> B{Condition}
    B -->|yes| C[Do work]
    B -->|no| D[Skip]
    C --> E[End]
    D --> E
```

---

## Tips

- Content is saved automatically a second after you stop typing
- Use the toolbar to insert Markdown snippets
- Put `[TOC]` anywhere to show the table of contents
- The editor and preview scroll together

**Start writing!**
"""

__all__ = ["SAMPLE_DOCUMENT"]
