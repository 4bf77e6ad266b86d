from pathlib import Path
from typing import Dict, List, Sequence

from .errors import FileReadFailure

SYSTEM_PROMPT = """You are an assistant who is an expert programmer and software engineer.
You will be provided with information about a certain programming problem, and it is your job to provide assistance however possible.
This can include writing code, debugging code, or providing information about the programming environment.
Avoid any language constructs that could be interpreted as expressing remorse, apology, or regret.
Refrain from disclaimers about you not being a professional or expert.
Keep responses unique and free of repetition.
Never suggest seeking information from elsewhere.
Always focus on the key points in my questions to determine my intent.
Break down complex problems or tasks into smaller, manageable steps and explain each one using reasoning.
Provide multiple perspectives or solutions.

The messages you receive will usually be of the following format:

<user message explaining the problem>

### File Tree:
information about the file hierarchy, with included files marked by "* "
note that this may exclude commonly .gitignore'd items such as directories containing build artifacts

### File Contents:
information about the file contents, for example:

```
// path/to/file1
<source code for file 1>
```
```
// path/to/file2
<source code for file 2>
```
"""


def read_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadFailure(path, str(exc)) from exc


def compose(prompt: str, tree: str, included_paths: Sequence[str]) -> str:
    """Build the user message: prompt, file tree, then every included file.

    Raises FileReadFailure on the first file that cannot be read, so nothing
    is sent with partial contents.
    """
    parts: List[str] = [f"{prompt}\n\n", f"### File Tree:\n{tree}\n\n", "### File Contents:\n"]
    for path in included_paths:
        parts.append(f"```\n// {path}\n{read_file(path)}\n```\n")
    return "".join(parts)


def build_chat_payload(query: str, model: str) -> Dict[str, object]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": query},
        ],
    }
