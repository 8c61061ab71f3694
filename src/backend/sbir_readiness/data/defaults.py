"""
Built-in documents the workspace starts from.

The solicitation rulepack and technology-area catalog are kept in their
JSON document form (camelCase keys) so they go through the same parsing
path as documents loaded at runtime.
"""

from typing import Any

DEFAULT_SOLICITATION: dict[str, Any] = {
    "meta": {
        "name": "AFX25.5 Release 8 (Amendment 1)",
        "version": "2025-05-22",
        "component": "DAF",
        "openDate": "2025-05-07",
        "closeDate": "2025-06-05",
    },
    "phasesSupported": ["Phase I", "Phase II", "D2P2"],
    "costCapUSD": 1_250_000,
    "maxPoPMonths": 21,
    "pagePolicy": {
        "techVolumeMaxPages": 15,
        "excludes": ["Coversheet", "Glossary", "Table of Contents"],
    },
    "mandatory": [
        {
            "id": "costCap",
            "label": "SBIR cost ≤ $1.25M",
            "extractorKey": "cost_total",
            "limit": {"kind": "number", "value": 1_250_000},
            "required": True,
        },
        {
            "id": "popCap",
            "label": "Period of Performance ≤ 21 months",
            "extractorKey": "pop_months",
            "limit": {"kind": "months", "value": 21},
            "required": True,
        },
        {
            "id": "cmSigned",
            "label": "Signed Customer Memorandum (end-user, customer, TPOC)",
            "extractorKey": "cm_signed",
            "required": True,
        },
        {
            "id": "pages",
            "label": "Technical Volume ≤ 15 pages (excl. Cover/TOC/Glossary)",
            "extractorKey": "tv_pages",
            "limit": {"kind": "pages", "value": 15},
            "required": True,
        },
        {
            "id": "rcf",
            "label": "Regulatory Compliance Form included",
            "extractorKey": "rcf_present",
            "required": True,
        },
    ],
    "additional": [
        {"id": "fwa", "label": "FWA Training proof included (Vol 6)", "extractorKey": "fwa_present", "required": False},
        {"id": "vol7", "label": "Volume 7 Disclosures completed", "extractorKey": "vol7_present", "required": False},
        {"id": "pow", "label": "% of Work meets SBIR thresholds", "extractorKey": "pow_ok", "required": False},
    ],
    "categories": [
        {
            "id": "TECH",
            "label": "Technical Merit",
            "weight": 0.45,
            "criteria": [
                {
                    "id": "tech_problem",
                    "label": "Problem & Use Case Framing",
                    "weight": 0.2,
                    "howToExcellence": "State a specific, quantifiable operational gap tied to mission outcomes; cite pages & end-user context.",
                },
                {
                    "id": "tech_approach",
                    "label": "Technical Approach Soundness & Merit",
                    "weight": 0.35,
                    "howToExcellence": "Provide defendable architecture, methods, and test plan with measurable performance thresholds.",
                },
                {
                    "id": "tech_risk",
                    "label": "Level of Risk",
                    "weight": 0.15,
                    "howToExcellence": "Identify top 3 risks with mitigation and exit criteria; show schedule & budget reserves.",
                },
                {
                    "id": "tech_innov",
                    "label": "Innovation & Differentiation",
                    "weight": 0.15,
                    "howToExcellence": "Explain what's novel vs. current alternatives; include benchmarks or prior data.",
                },
                {
                    "id": "team",
                    "label": "Team Qualifications",
                    "weight": 0.15,
                    "howToExcellence": "Show PIs' relevant prior art, clear roles, and key subs with availability letters.",
                },
            ],
        },
        {
            "id": "DEF_NEED",
            "label": "Defense Need",
            "weight": 0.35,
            "criteria": [
                {
                    "id": "mission_impact",
                    "label": "Mission Impact & Urgency",
                    "weight": 0.35,
                    "howToExcellence": "Quantify operational effect (time saved, probability of kill, availability). Tie to CONOPS.",
                },
                {
                    "id": "breadth",
                    "label": "Breadth of Applicability",
                    "weight": 0.2,
                    "howToExcellence": "Map to multiple MAJCOMs/POs/platforms with similar needs.",
                },
                {
                    "id": "specificity",
                    "label": "Specificity of Need & Adequacy of Effort",
                    "weight": 0.3,
                    "howToExcellence": "Show scope aligns with need & PoP; include CM details & path to OTAs or PALT.",
                },
                {
                    "id": "docs",
                    "label": "CM & Supporting Docs (Phase II only)",
                    "weight": 0.15,
                    "howToExcellence": "Include signed CM; add letters/MOUs for adoption and funding pathways.",
                },
            ],
        },
        {
            "id": "COMM",
            "label": "Commercialization",
            "weight": 0.2,
            "criteria": [
                {
                    "id": "market",
                    "label": "Market & Revenue Potential",
                    "weight": 0.35,
                    "howToExcellence": "Show TAM/SAM/SOM with defensible bottoms-up revenue model.",
                },
                {
                    "id": "biz",
                    "label": "Business Plan",
                    "weight": 0.3,
                    "howToExcellence": "Pricing, channels, margin structure, sales plan; showcase traction KPIs.",
                },
                {
                    "id": "interest",
                    "label": "Defense & Private Interest",
                    "weight": 0.2,
                    "howToExcellence": "Document pilots, LOIs, OTA interest, matching funds prospects.",
                },
                {
                    "id": "docs_comm",
                    "label": "CM & Supporting Docs (Phase II)",
                    "weight": 0.15,
                    "howToExcellence": "Attach commitment forms, cost share, transition letters.",
                },
            ],
        },
    ],
    "milestoneRules": [
        {"id": "rnd", "label": "R&D Centric", "rule": "Milestones must be primarily R&D (not training/admin)."},
        {"id": "measurable", "label": "Measurable Output", "rule": "Each milestone includes acceptance criteria & testable deliverable."},
        {"id": "timeline", "label": "Time-Boxed", "rule": "Each milestone has start/end within PoP and clear dependencies."},
    ],
    "references": {
        "triUrl": "https://afwerx.com/divisions/ventures/open-topic/",
        "baaUrl": "https://www.dodsbirsttr.mil/",
    },
}


DEFAULT_TECHNOLOGY_AREAS: dict[str, Any] = {
    "version": "2023-03-21",
    "areas": [
        {"id": "futureg", "label": "FutureG", "keywords": ["5G", "6G", "ORAN", "spectrum"]},
        {"id": "trusted_ai", "label": "Trusted AI & Autonomy", "keywords": ["assurance", "robustness", "safety", "V&V"]},
        {"id": "bio", "label": "Biotechnology"},
        {"id": "acsw", "label": "Advanced Computing & Software", "keywords": ["HPC", "compiler", "runtime"]},
        {"id": "isc", "label": "Integrated Sensing & Cyber"},
        {"id": "de", "label": "Directed Energy"},
        {"id": "hyp", "label": "Hypersonics"},
        {"id": "me", "label": "Microelectronics"},
        {"id": "inss", "label": "Integrated Network Systems-of-Systems"},
        {"id": "quant", "label": "Quantum Science"},
        {"id": "space", "label": "Space Technology"},
        {"id": "energy", "label": "Renewable Energy Generation & Storage"},
        {"id": "mat", "label": "Advanced Materials"},
        {"id": "hmi", "label": "Human-Machine Interfaces"},
    ],
}


DEFAULT_MILESTONES: list[dict[str, Any]] = [
    {
        "id": "m1",
        "title": "M1: Architecture & Test Plan",
        "description": "Baseline architecture, verification plan, KPIs.",
        "rdCentric": True,
        "measurable": True,
        "start": "",
        "end": "",
    },
    {
        "id": "m2",
        "title": "M2: Prototype V1",
        "description": "Alpha prototype with core feature set.",
        "rdCentric": True,
        "measurable": True,
        "start": "",
        "end": "",
    },
]


# Generic rubric sent to the external scorer. Independent of the
# configurable solicitation rubric above.
GENERIC_RUBRIC: list[dict[str, Any]] = [
    {"key": "Significance", "weight": 1.2, "guidance": "Impact & problem clarity"},
    {"key": "Innovation", "weight": 1.0, "guidance": "Novelty & differentiation"},
    {"key": "Approach", "weight": 1.4, "guidance": "Method, risks, milestones"},
    {"key": "Team/PI", "weight": 0.8, "guidance": "Qualifications & gaps"},
    {"key": "Commercialization", "weight": 1.6, "guidance": "Path to revenue & market"},
]

DEFAULT_DRAFT = "Background: ...\n\nTechnical Approach: ...\n\nCommercialization Plan: ..."
