"""
Lead Fit Engine - Usage Examples
================================
Scoring leads, finding similar companies and recommending attachments.
"""

import logging

# =============================================================================
# EXAMPLE 1: Lead Fit Scoring
# =============================================================================

def example_lead_scoring():
    """Score and analyze a lead"""
    from leadfit_engine import create_engine
    from leadfit_engine.models.schemas import Lead, SearchCriteria

    engine = create_engine(similarity_threshold=0.3)

    criteria = SearchCriteria(
        industry="Technology",
        location="Beijing",
        company_size="51-200",
        keywords="AI, automation",
    )

    leads = [
        Lead(
            lead_id="lead-001",
            company_name="Northwind Robotics",
            customer_email="sales@northwind.example.com",
            customer_website="https://www.northwind.example.com",
            contact_person="Li Wei",
            phone="+86 10 5555 0101",
            description=(
                "Northwind Robotics builds warehouse automation software and "
                "machine learning tools for logistics operators."
            ),
            industry="Software",
            location="Beijing",
            company_size="51-200",
            match_reasons=["Uses AI in logistics", "Expanding in North China"],
            discovery_confidence=0.8,
        ),
        Lead(
            lead_id="lead-002",
            company_name="Harbor Analytics",
            customer_email="info@harbor.example.com",
            customer_website="https://harbor.example.com",
            description="Harbor Analytics provides automation software for logistics reporting.",
            industry="Software",
            location="Tianjin",
            company_size="11-50",
        ),
        Lead(
            lead_id="lead-003",
            company_name="Golden Bakery",
            industry="Retail",
            location="Guangzhou",
        ),
    ]

    print("=" * 60)
    print("SCORING LEAD: Northwind Robotics")
    print("=" * 60)

    scores = engine.score_lead(leads[0], criteria)
    print(f"\nOverall:       {scores.overall:.2f}")
    print(f"  Industry:      {scores.industry:.2f}")
    print(f"  Location:      {scores.location:.2f}")
    print(f"  Company Size:  {scores.company_size:.2f}")
    print(f"  Engagement:    {scores.engagement:.2f}")
    print(f"  AI Confidence: {scores.ai_confidence:.2f}")

    report = engine.analyze_lead(leads[0], leads, criteria)

    print("\n--- Similar Companies ---")
    for lead_id in report.similar_companies:
        print(f"  • {lead_id}")

    print("\n--- Recommendations ---")
    for item in report.recommendations:
        print(f"  • {item}")

    print("\n--- Risk Factors ---")
    for item in report.risk_factors:
        print(f"  ⚠ {item}")

    print("\n--- Next Actions ---")
    for item in report.next_actions:
        print(f"  → {item}")

    return report


# =============================================================================
# EXAMPLE 2: Batch Scoring
# =============================================================================

def example_batch_scoring():
    """Score several leads in parallel"""
    from leadfit_engine import LeadIntelligenceEngine
    from leadfit_engine.models.schemas import Lead, SearchCriteria

    engine = LeadIntelligenceEngine()
    criteria = SearchCriteria(industry="Finance", location="Shanghai")

    leads = [
        Lead(lead_id=f"lead-{i:03d}", company_name=name, industry=industry, location=location)
        for i, (name, industry, location) in enumerate([
            ("Bund Capital", "Investment", "Shanghai"),
            ("River Insurance", "Insurance", "Hangzhou"),
            ("Delta Bank", "Finance", "Shanghai"),
            ("Hill Farms", "Agriculture", "Chengdu"),
        ], start=1)
    ]

    batch = engine.score_batch(leads, criteria, max_workers=4)

    print("=" * 60)
    print(f"BATCH RESULTS: {batch.processed} leads in {batch.processing_time_ms}ms")
    print("=" * 60)

    for item in batch.results:
        print(f"  {item.lead.company_name:<18} {item.scores.overall:.2f}")

    return batch


# =============================================================================
# EXAMPLE 3: Attachment Matching
# =============================================================================

def example_attachment_matching():
    """Recommend product materials for an outbound email"""
    from leadfit_engine import LeadIntelligenceEngine
    from leadfit_engine.models.schemas import EmailContent, Material

    # Any prompt-in, text-out callable works as the summarizer
    def canned_summarizer(prompt: str) -> str:
        return "warehouse, automation, case study, pricing"

    engine = LeadIntelligenceEngine(summarizer=canned_summarizer)

    email = EmailContent(
        subject="Cutting picking errors with warehouse automation",
        body="Hi Li Wei, our platform helped a logistics operator like yours...",
        customer_name="Northwind Robotics",
        customer_website="https://www.northwind.example.com",
        industry="Logistics",
    )

    materials = [
        Material(
            material_id="m1",
            file_name="warehouse_automation_overview.pdf",
            file_type="application/pdf",
            description="Product overview of the automation suite",
            keywords=["automation", "warehouse"],
        ),
        Material(
            material_id="m2",
            file_name="logistics_case_study.pdf",
            file_type="application/pdf",
            description="How a 3PL cut picking errors with warehouse automation",
        ),
        Material(
            material_id="m3",
            file_name="pricing_2024.xlsx",
            file_type="application/vnd.ms-excel",
        ),
        Material(
            material_id="m4",
            file_name="team_photo.jpg",
            file_type="image/jpeg",
        ),
    ]

    result = engine.match_attachments(email, materials)

    print("=" * 60)
    print("ATTACHMENT RECOMMENDATIONS")
    print("=" * 60)
    print(f"\nKeywords: {', '.join(result.keywords)}")
    print(f"Summary:  {result.summary}\n")

    for match in result.matches:
        print(f"  {match.material.file_name:<36} {match.relevance_score:>4.1f}  {match.confidence.value}")
        for reason in match.match_reasons:
            print(f"      - {reason}")

    return result


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("\n" + "=" * 60)
    print("LEAD FIT ENGINE - USAGE EXAMPLES")
    print("=" * 60 + "\n")

    print("\n[Example 1: Lead Scoring]")
    example_lead_scoring()

    print("\n" + "-" * 60)
    print("\n[Example 2: Batch Scoring]")
    example_batch_scoring()

    print("\n" + "-" * 60)
    print("\n[Example 3: Attachment Matching]")
    example_attachment_matching()

    print("\n" + "=" * 60)
    print("EXAMPLES COMPLETE")
    print("=" * 60)
