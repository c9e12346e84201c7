from __future__ import annotations

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from analyze_grammar import analysis_report
from formalgrammar import GrammarError, GrammarParser


app = FastAPI(title="FIRST/FOLLOW Grammar Analyzer", version="1.0.0")

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)


class GrammarRequest(BaseModel):
	# Example: "<S> ::= a<A>\n<A> ::= b | <>"
	source: str | None = None
	# Alternatively, one production per entry
	lines: list[str] | None = None
	# Include FIRST/FOLLOW iteration logs ("show working")
	include_working: bool = False

	def source_lines(self) -> List[str]:
		out: List[str] = []
		if self.source:
			out.extend(self.source.splitlines())
		if self.lines:
			out.extend(self.lines)
		return out


@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
	return HTMLResponse(
		"<h2>Grammar Analyzer API</h2>"
		"<p>POST <code>/api/grammar</code> with JSON: <code>{\"source\": \"&lt;S&gt; ::= a&lt;A&gt;\\n&lt;A&gt; ::= b | &lt;&gt;\"}</code></p>"
	)


@app.get("/health")
def health() -> Dict[str, str]:
	return {"status": "ok"}


@app.post("/api/grammar")
def analyze(req: GrammarRequest) -> Dict[str, Any]:
	"""
	Parse the submitted grammar and return its canonical rendering with FIRST/FOLLOW sets.
	Sets are serialized as sorted lists; epsilon is written as "eps".
	"""
	parser = GrammarParser()
	try:
		parser.parse_lines(req.source_lines())
	except GrammarError as e:
		raise HTTPException(status_code=400, detail=str(e)) from e
	grammar = parser.finish()

	report = analysis_report(grammar, include_working=req.include_working)
	report.setdefault("working", None)
	return report
