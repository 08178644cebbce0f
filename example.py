from dotenv import load_dotenv

from contractguard import ContractGuardian, highlight_segments, list_models, redact


load_dotenv()


CONTRACT = """
This Agreement is made on 01/15/2025 between Acme Corp and Globex Industries LLC.
Payment is due within 60 days. Send notices to counsel@globex.com.
Acme Corp may terminate this Agreement at any time.
"""

# Redaction is local: nothing leaves the machine here
redaction = redact(CONTRACT)
print(redaction.redacted_text)
print(redaction.mapping)

for segment in highlight_segments(redaction):
    if segment.is_placeholder:
        print(f"{segment.text} -> {redaction.mapping[segment.text]}")

# List available models
print("Available models:", list(list_models().keys()))

# Use default model (claude-haiku-4); only the redacted text is sent
guardian = ContractGuardian()
result = guardian.analyze_text(CONTRACT, document_id="acme_globex")

if result.success:
    report = result.restored()
    print(report.risk_level, report.overall_risk_score)
    print(report.summary)
    for flag in report.red_flags:
        print(f"- [{flag.severity}] {flag.plain_english}")
else:
    print("Analysis failed:", result.error)

# Alternative: use OpenAI
# guardian_openai = ContractGuardian(model="gpt-4o-mini")
# result = guardian_openai.analyze_file("contracts/msa.pdf")
