import json
import logging
from pathlib import Path

from ..core.model import WorkerContext
from ..core.ports import ExportAdapter, Renderer

log = logging.getLogger("mdxld_workers.export")

_TEMPLATE = """\
// Worker context
globalThis.WORKER_CONTEXT = {context};

// Create fetch handler
async function handleFetch(request) {{
  return new Response(WORKER_CONTEXT.content, {{
    headers: {{
      'Content-Type': 'text/html',
      'X-MDXLD-Metadata': JSON.stringify(WORKER_CONTEXT.metadata),
    }},
  }});
}}

// Export fetch handler
export default {{ fetch: handleFetch }};
"""


class WorkerModuleExporter(Renderer, ExportAdapter):
    """Embed a compiled document into a standalone ES module worker script."""

    def __init__(self, compatibility_date: str | None = None):
        self.compatibility_date = compatibility_date

    def render(self, context: WorkerContext) -> str:
        header = ""
        if self.compatibility_date:
            header = f"// compatibility_date: {self.compatibility_date}\n"
        return header + _TEMPLATE.format(context=context.to_json(indent=2))

    def export(self, context: WorkerContext, out: Path) -> Path:
        # A directory (or a path without suffix) gets <name>.js inside it
        if out.is_dir() or not out.suffix:
            out = out / f"{context.metadata.name or 'worker'}.js"
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.render(context), encoding="utf-8")
        log.debug("Wrote worker module to %s", out)
        return out
