from __future__ import annotations

import argparse
import os
import sys

import orjson

from common.config import secrets
from ingestion.knowledge_base import ResumeKnowledgeBase
from ingestion.loaders import describe_candidates


def build_report(include_fragments: bool = False) -> dict:
    kb = ResumeKnowledgeBase.load()
    resume = kb.resume
    report = {
        "cwd": os.getcwd(),
        "has_openai_key": bool(secrets.openai_api_key),
        "resume_candidates": describe_candidates(),
        "counts": {
            "experience": len(resume.experience),
            "projects": len(resume.projects),
            "skills": len(resume.skills),
            "education": len(resume.education),
            "fragments": len(kb.fragments),
        },
        "fragment_version": kb.version,
    }
    if include_fragments:
        report["fragments"] = [
            {"id": f.fragment_id, "text": f.text} for f in kb.fragments
        ]
    return report


def main():
    parser = argparse.ArgumentParser(
        description="Show where the résumé is loaded from and what it normalizes to."
    )
    parser.add_argument("--fragments", action="store_true", help="Include all fragments")
    args = parser.parse_args()

    report = build_report(include_fragments=args.fragments)
    sys.stdout.write(orjson.dumps(report, option=orjson.OPT_INDENT_2).decode("utf-8"))
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
