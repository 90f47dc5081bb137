"""Static informational pages printed by the business commands.

Each page is a sequence of ``(text, style)`` rows rendered top to bottom.
"""

from __future__ import annotations

from termsite.domain.models import OutputStyle

R = OutputStyle.RESPONSE
I = OutputStyle.INFO  # noqa: E741
D = OutputStyle.DIM
H = OutputStyle.HEADER
S = OutputStyle.SUCCESS
W = OutputStyle.WARNING
E = OutputStyle.ERROR

Page = list[tuple[str, OutputStyle]]

BLANK = ("", R)


def rule(width: int = 50) -> tuple[str, OutputStyle]:
    return ("─" * width, D)


def titled(title: str, rows: Page, width: int = 50, style: OutputStyle = H) -> Page:
    """Wrap ``rows`` with a title, rule and surrounding blank lines."""
    return [BLANK, (title, style), rule(width), BLANK, *rows, BLANK]


BANNER = r"""
 _                  _ _
| |_ _ __ _   _ ___(_) | __  ___ ___  _ __ ___
| __| '__| | | / __| | |/ / / __/ _ \| '_ ` _ \
| |_| |  | |_| \__ \ |   < | (_| (_) | | | | | |
 \__|_|   \__,_|___/_|_|\_(_)___\___/|_| |_| |_|
"""

WELCOME: Page = [
    ("", R),
    ("Professional IT Security &amp; Consulting Services", H),
    ("Hainburg an der Donau, Austria | Worldwide Remote Services", D),
    ("", R),
    ('Type "services" for offerings | "help" for commands', I),
    ('Type "consultation" to request a free initial consultation', S),
    ("", R),
]

NEOFETCH = r"""
        .---.        guest@trusik.com
       /     \       ─────────────────
       \.@-@./       OS: TrusikOS Terminal
       /`\_/`\       Host: trusik.com
      //  _  \\      Kernel: Web 1.0
     | \     )|_     Shell: tsh
    /`\_`>  <_/ \    Terminal: trusik-term
    \__/'---'\__/    CPU: Your Browser
"""

INFO = titled("TRUSIK.COM", [
    ("  Professional IT Security &amp; Consulting Services", I),
    BLANK,
    ("  Specializations:", H),
    ("  • AI Security &amp; Implementation", R),
    ("  • Penetration Testing &amp; Audits", R),
    ("  • Emergency Data Recovery", R),
    ("  • Cloud Security Architecture", R),
    ("  • Reverse Engineering Analysis", R),
    ("  • Digital Forensics", R),
    BLANK,
    ("  Background:", H),
    ("  • Multi-domain expertise: SW/HW/Legal/Psychology", R),
    ("  • ProtoWay s.r.o. - NeoDCP Player Development", R),
    ("  • METREX s.r.o. - Software &amp; Metallurgy Services", R),
    BLANK,
    ("  Location: Hainburg an der Donau, Austria", D),
    ("  Service Area: Vienna region + Worldwide (remote)", D),
    BLANK,
    ('  Type "services" for detailed offerings', S),
])

SERVICES = titled("PROFESSIONAL IT SERVICES", [
    ("  CORE OFFERINGS", I),
    ("  • AI Security &amp; Implementation", R),
    ("  • Penetration Testing &amp; Security Audits", R),
    ("  • Emergency Data Recovery", R),
    BLANK,
    ("  ADDITIONAL SERVICES", I),
    ("  • Cloud Migration &amp; Security", R),
    ("  • Reverse Engineering Analysis", R),
    ("  • Legacy System Modernization", R),
    ("  • Digital Forensics", R),
    BLANK,
    ("  Type specific service commands for details:", D),
    ("  ai-security, pentest, data-recovery, pricing", D),
])

CONTACT = titled("CONTACT INFORMATION", [
    ("  Location: Hainburg an der Donau, Lower Austria, Austria", I),
    BLANK,
    ("  Service Area:", H),
    ("  • On-site: Vienna metropolitan area", R),
    ("  • Remote: Worldwide", R),
    BLANK,
    ("  For inquiries, type: consultation", D),
    ("  For emergencies, type: emergency", D),
])

CONSULTATION = titled("FREE INITIAL CONSULTATION", [
    ("  Schedule a 30-minute consultation to discuss:", I),
    ("  • Your security requirements", R),
    ("  • Project scope and timeline", R),
    ("  • Custom service packages", R),
    BLANK,
    ('  Type "contact-form" to submit a request', S),
])

SOFTWARE = titled("SOFTWARE STACK", [
    ("  Runtime:", I),
    ("    • Python 3 with a single asyncio event loop", R),
    ("    • Pydantic models for every record on the wire", R),
    ("    • httpx for background network calls", R),
    BLANK,
    ("  Security:", I),
    ("    • Client-side rate limiting", R),
    ("    • Input sanitization &amp; validation", R),
    ("    • Fire-and-forget telemetry that never blocks input", R),
], width=40)

AI_SECURITY = titled("AI SECURITY &amp; IMPLEMENTATION", [
    ("  SERVICES OFFERED", I),
    BLANK,
    ("  Security Assessment:", H),
    ("  • AI/ML model vulnerability testing", R),
    ("  • Shadow AI detection and inventory", R),
    ("  • Data leakage risk analysis", R),
    ("  • Adversarial attack simulation", R),
    BLANK,
    ("  Implementation Support:", H),
    ("  • Secure AI integration consulting", R),
    ("  • AI governance framework development", R),
    ("  • Staff training on AI security", R),
    ("  • Ongoing monitoring and support", R),
    BLANK,
    ("  Compliance:", H),
    ("  • EU AI Act readiness assessment", R),
    ("  • GDPR compliance for AI systems", R),
    ("  • Risk management documentation", R),
    BLANK,
    ("  TYPICAL ENGAGEMENT", I),
    ("  Duration: 2-4 weeks initial assessment", D),
    ("  Delivery: Comprehensive report + remediation plan", D),
    ("  Follow-up: Monthly retainer options available", D),
    BLANK,
    ('  Type "pricing" for rates | "consultation" to inquire', S),
])

PENTEST = titled("PENETRATION TESTING &amp; SECURITY AUDITS", [
    ("  TESTING SCOPE", I),
    BLANK,
    ("  Network Security:", H),
    ("  • External/internal network penetration testing", R),
    ("  • Wireless network security assessment", R),
    ("  • Firewall and IDS/IPS configuration review", R),
    ("  • Network segmentation analysis", R),
    BLANK,
    ("  Application Security:", H),
    ("  • Web application penetration testing", R),
    ("  • API security assessment", R),
    ("  • Mobile application testing", R),
    ("  • Source code security review", R),
    BLANK,
    ("  Infrastructure:", H),
    ("  • Cloud security assessment (AWS/Azure/GCP)", R),
    ("  • Active Directory security audit", R),
    ("  • Database security review", R),
    ("  • IoT/SCADA system testing", R),
    BLANK,
    ("  Social Engineering:", H),
    ("  • Phishing simulations", R),
    ("  • Physical security assessment", R),
    ("  • Security awareness training", R),
    BLANK,
    ("  DELIVERABLES", I),
    ("  • Executive summary for management", D),
    ("  • Technical findings with severity ratings", D),
    ("  • Proof-of-concept exploits (where applicable)", D),
    ("  • Detailed remediation recommendations", D),
    ("  • Re-testing of fixed vulnerabilities", D),
    BLANK,
    ('  Type "pricing" for rates | "consultation" to inquire', S),
])

DATA_RECOVERY = titled("EMERGENCY DATA RECOVERY", [
    ("  RECOVERY SERVICES", I),
    BLANK,
    ("  Hardware Failures:", H),
    ("  • Hard drive (HDD/SSD) recovery", R),
    ("  • RAID array reconstruction", R),
    ("  • Electronic component repair", R),
    ("  • Clean room data extraction", R),
    BLANK,
    ("  Software Issues:", H),
    ("  • Corrupted file system recovery", R),
    ("  • Deleted data restoration", R),
    ("  • Ransomware decryption attempts", R),
    ("  • Database corruption repair", R),
    BLANK,
    ("  Forensics:", H),
    ("  • Digital evidence preservation", R),
    ("  • Chain of custody documentation", R),
    ("  • Legal-grade forensic reports", R),
    ("  • Expert witness services", R),
    BLANK,
    ("  RESPONSE TIME", I),
    ("  • Critical: 24-hour response", W),
    ("  • Urgent: 48-hour response", R),
    ("  • Standard: 5-7 business days", D),
    BLANK,
    ('  "No data, no fee" policy for most recoveries', S),
    BLANK,
    ('  Type "emergency" for critical support', W),
    ('  Type "consultation" for standard inquiries', D),
])

PRICING = titled("SERVICE PACKAGES &amp; RATES", [
    ("  HOURLY RATES", I),
    ("  Standard Consulting: 120 EUR/hour", R),
    ("  Emergency Response: 180 EUR/hour", W),
    ("  After-hours/Weekend: 200 EUR/hour", W),
    BLANK,
    ("  PACKAGE 1: SECURITY AUDIT PRO", H),
    ("  Duration: 1-2 weeks", D),
    ("  Includes:", D),
    ("  • Comprehensive penetration testing", R),
    ("  • Security policy review", R),
    ("  • AI/Shadow AI assessment", R),
    ("  • GDPR/CRA compliance check", R),
    ("  • Detailed report + remediation roadmap", R),
    ("  Price: 5,000 - 15,000 EUR", S),
    BLANK,
    ("  PACKAGE 2: AI INTEGRATION CONSULTING", H),
    ("  Monthly Retainer", D),
    ("  Includes:", D),
    ("  • AI strategy development", R),
    ("  • Secure implementation support", R),
    ("  • Staff training (up to 4 hours/month)", R),
    ("  • Priority support access", R),
    ("  Price: 2,000 - 5,000 EUR/month", S),
    BLANK,
    ("  PACKAGE 3: CLOUD TRANSFORMATION", H),
    ("  Project-based pricing", D),
    ("  Includes:", D),
    ("  • Cloud architecture design", R),
    ("  • Migration execution", R),
    ("  • Security implementation", R),
    ("  • Post-migration support (30 days)", R),
    ("  Price: 10,000 - 50,000 EUR", S),
    BLANK,
    ("  DATA RECOVERY", H),
    ("  • Assessment: 200 EUR (waived if proceeding)", D),
    ("  • Recovery: Variable based on complexity", D),
    ('  • "No data, no fee" for most cases', D),
    BLANK,
    ("  All prices exclude VAT. Custom packages available.", D),
    ('  Type "consultation" to discuss your project', S),
])

PROJECTS = titled("PORTFOLIO &amp; CASE STUDIES", [
    ("  NOTABLE PROJECTS", I),
    BLANK,
    ("  [1] NeoDCP Player Development", H),
    ("  Company: ProtoWay s.r.o.", D),
    ("  Scope: Professional DCP playback software", R),
    ("  Technologies: C++, multimedia processing, encryption", R),
    ("  URL: https://www.neodcp.com", I),
    BLANK,
    ("  [2] Industrial Automation Systems", H),
    ("  Company: METREX s.r.o.", D),
    ("  Scope: Software development for metallurgy sector", R),
    ("  Technologies: SCADA, industrial protocols, databases", R),
    BLANK,
    ("  [3] Multi-Domain Consulting", H),
    ("  Expertise areas:", D),
    ("  • Hardware/Software integration", R),
    ("  • Security architecture design", R),
    ("  • Legal system experience (expert testimony)", R),
    ("  • Reverse engineering &amp; analysis", R),
    BLANK,
    ("  CONFIDENTIAL CLIENT WORK", I),
    ("  Additional case studies available under NDA", D),
    BLANK,
    ('  Type "consultation" to discuss your project', S),
])

CERTIFICATIONS = titled("EXPERTISE &amp; QUALIFICATIONS", [
    ("  PROFESSIONAL BACKGROUND", I),
    BLANK,
    ("  Multi-Domain Expertise:", H),
    ("  • Software/Hardware Development", R),
    ("  • System Administration &amp; Security", R),
    ("  • Database Management &amp; Optimization", R),
    ("  • Data Recovery &amp; Digital Forensics", R),
    ("  • Reverse Engineering Analysis", R),
    ("  • Legal System Experience", R),
    ("  • Applied Psychology in Security", R),
    BLANK,
    ("  Business Experience:", H),
    ("  • ProtoWay s.r.o. - DCP Player Development", R),
    ("  • METREX s.r.o. - Software &amp; Metallurgy", R),
    ("  • Cross-industry consulting", R),
    BLANK,
    ("  Technical Skills:", H),
    ("  • Languages: C/C++, Python, PHP, JavaScript, SQL", R),
    ("  • Systems: Linux, Windows, embedded systems", R),
    ("  • Security: Penetration testing, forensics, encryption", R),
    ("  • Cloud: AWS, Azure, GCP architecture", R),
    ("  • Hardware: Electronics repair, data recovery", R),
    BLANK,
    ("  APPROACH", I),
    ("  Practical, real-world problem solving over credentials.", D),
    ("  20+ years combined experience across multiple domains.", D),
    BLANK,
    ('  Type "projects" to see work examples', S),
])

AVAILABILITY = titled("CURRENT AVAILABILITY", [
    ("  STATUS: Accepting New Projects", S),
    BLANK,
    ("  Lead Times:", I),
    ("  • Emergency response: 24 hours", W),
    ("  • Security audits: 2-3 weeks", R),
    ("  • Consulting projects: 1-2 weeks", R),
    ("  • Custom development: Variable", D),
    BLANK,
    ("  Working Hours:", I),
    ("  • Standard: Monday-Friday, 09:00-17:00 CET", R),
    ("  • Emergency: 24/7 critical response", W),
    ("  • Remote: Flexible scheduling for international clients", D),
    BLANK,
    ('  Type "consultation" to check specific dates', S),
])

EMERGENCY = titled("⚠️  EMERGENCY SUPPORT  ⚠️", [
    ("  24/7 CRITICAL RESPONSE", H),
    BLANK,
    ("  For immediate assistance with:", I),
    ("  • Active security breaches", E),
    ("  • Ransomware attacks", E),
    ("  • Critical data loss", E),
    ("  • System failures affecting operations", E),
    BLANK,
    ("  RESPONSE TIME: Within 24 hours", W),
    ("  RATE: 180 EUR/hour (emergency rate)", W),
    BLANK,
    ("  CONTACT METHOD", H),
    ("  Phone: [PHONE_NUMBER]", S),
    ("  (For voice calls in critical situations)", D),
    BLANK,
    ("  For non-emergency inquiries:", I),
    ('  Type "contact-form" to submit a request', R),
], style=W)
