import json

import pytest

from gpt_review.config import Config

TWO_FILE_DIFF = """\
diff --git a/x.md b/x.md
index 1111111..2222222 100644
--- a/x.md
+++ b/x.md
@@ -1,2 +1,3 @@
 # Title
+More docs
 end
diff --git a/y.ts b/y.ts
index 3333333..4444444 100644
--- a/y.ts
+++ b/y.ts
@@ -3,3 +3,4 @@ function main() {
 const a = 1;
 const b = 2;
+const c = eval(input);
 return a;
"""

DELETED_FILE_DIFF = """\
diff --git a/old.py b/old.py
deleted file mode 100644
index 5555555..0000000
--- a/old.py
+++ /dev/null
@@ -1,2 +0,0 @@
-print("a")
-print("b")
"""

ADDED_FILE_DIFF = """\
diff --git a/new.py b/new.py
new file mode 100644
index 0000000..6666666
--- /dev/null
+++ b/new.py
@@ -0,0 +1,2 @@
+x = 1
+y = 2
"""

MULTI_HUNK_DIFF = """\
diff --git a/src/app.py b/src/app.py
index 7777777..8888888 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,3 @@
 import os
-import sys
+import json
 
@@ -10,2 +10,3 @@ def run():
     start()
+    stop()
     return 0
"""


@pytest.fixture
def config():
    return Config(
        github_token="ghp_test",
        openai_api_key="azure-key",
        openai_endpoint="https://example.openai.azure.com",
        event_path="/tmp/event.json",
        exclude_patterns=("**/*.md",),
        event_name="pull_request",
    )


@pytest.fixture
def event_file(tmp_path):
    def write(payload):
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload))
        return str(path)
    return write


def event_payload(action, number=7, **extra):
    payload = {
        "action": action,
        "number": number,
        "repository": {"name": "widgets", "owner": {"login": "acme"}},
    }
    payload.update(extra)
    return payload
