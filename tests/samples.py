SCENARIO_RESUME = """John Doe
john@x.com
555-123-4567

SKILLS
Python, SQL, AWS

EXPERIENCE
Data Engineer
Acme Corp
2020 - Present
• Built ETL pipelines
"""

SCENARIO_JD = """Title: Data Engineer
Requirements:
- 3+ years Python
- SQL
- AWS"""

FULL_RESUME = """Jane Smith
San Francisco, CA | jane.smith@example.com | (415) 555-0134
linkedin.com/in/janesmith | github.com/janesmith
Portfolio: https://janesmith.dev

SUMMARY
Backend engineer with 6 years of experience building data-intensive services in Python and Go for fintech companies.

TECHNICAL SKILLS
Languages: Python, Go, SQL
Tools: Docker | Kubernetes | PostgreSQL

EXPERIENCE
Senior Software Engineer | Stripe | Jan 2021 - Present
- Led migration of payment ledger to PostgreSQL, cutting latency by 40%
- Built internal tooling used by 200 engineers

Software Engineer at Plaid
Jun 2018 - Dec 2020
- Developed ETL pipelines in Python
- Maintained REST APIs serving 5 million requests per day

EDUCATION
B.S. in Computer Science, University of California, Berkeley, 2014 - 2018
GPA: 3.8

PROJECTS
Ledger Viz - Interactive dashboard for ledger anomalies
- Built with React, D3 and Flask
- https://github.com/janesmith/ledger-viz

CERTIFICATIONS
AWS Certified Solutions Architect (Amazon Web Services) 2022

LANGUAGES
English (Native), Spanish (Professional)
"""

FULL_JD = """Senior Backend Engineer - Acme Corp
Location: Austin, TX
Full-time

About the role
You will design and operate services that process millions of payments every day.

Responsibilities:
- Design, build and maintain scalable payment APIs
- Mentor junior engineers and review code

Requirements:
- 5+ years of experience with Python
- Experience with PostgreSQL and Redis
- Strong communication skills

Nice to have:
- Kubernetes
- GraphQL

Salary: $120K - $180K
"""
