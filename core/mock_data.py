"""
Fixed reference records served by the dashboard, billing and approvals
endpoints until something is persisted over them.
"""
from core.content_generator import client_id_for

DEFAULT_PROJECTS = [
    {"id": 1, "name": "Q1 Brand Campaign", "client": "TechCorp Industries", "status": "in-progress",
     "progress": 65, "due_date": "2026-01-15", "priority": "high", "team": ["JD", "AS", "MK"]},
    {"id": 2, "name": "Social Media Strategy", "client": "Green Solutions Ltd", "status": "in-progress",
     "progress": 40, "due_date": "2026-01-22", "priority": "medium", "team": ["AS", "RB"]},
    {"id": 3, "name": "Website Redesign", "client": "Nova Ventures", "status": "review",
     "progress": 90, "due_date": "2026-01-08", "priority": "urgent", "team": ["JD", "MK", "LT", "AS"]},
    {"id": 4, "name": "Email Marketing Series", "client": "Atlas Media Group", "status": "completed",
     "progress": 100, "due_date": "2025-12-28", "priority": "low", "team": ["RB"]},
    {"id": 5, "name": "Product Launch Campaign", "client": "TechCorp Industries", "status": "planning",
     "progress": 15, "due_date": "2026-02-10", "priority": "high", "team": ["JD", "AS"]},
    {"id": 6, "name": "Annual Report Design", "client": "Urban Development Co", "status": "in-progress",
     "progress": 55, "due_date": "2026-01-30", "priority": "medium", "team": ["MK", "LT"]},
]

INVOICES = [
    {"id": "INV-2026-001", "client": "TechCorp Industries", "amount": 12500, "status": "paid",
     "due_date": "2026-01-15", "paid_date": "2026-01-12", "items": 3},
    {"id": "INV-2026-002", "client": "Green Solutions Ltd", "amount": 8200, "status": "pending",
     "due_date": "2026-01-20", "paid_date": None, "items": 2},
    {"id": "INV-2025-089", "client": "Nova Ventures", "amount": 4500, "status": "overdue",
     "due_date": "2025-12-28", "paid_date": None, "items": 1},
    {"id": "INV-2025-088", "client": "Atlas Media Group", "amount": 18750, "status": "paid",
     "due_date": "2025-12-20", "paid_date": "2025-12-18", "items": 5},
    {"id": "INV-2026-003", "client": "Urban Development Co", "amount": 15600, "status": "draft",
     "due_date": "2026-01-25", "paid_date": None, "items": 4},
    {"id": "INV-2025-087", "client": "TechCorp Industries", "amount": 9800, "status": "paid",
     "due_date": "2025-12-10", "paid_date": "2025-12-08", "items": 2},
]

CAMPAIGN_ACTIVITIES = [
    {"id": 1, "type": "email", "title": "Newsletter Campaign Approved", "client": "TechCorp Industries",
     "time": "2 hours ago", "status": "approved"},
    {"id": 2, "type": "social", "title": "Instagram Post Scheduled", "client": "Green Solutions Ltd",
     "time": "4 hours ago", "status": "pending"},
    {"id": 3, "type": "blog", "title": "Blog Article Rejected", "client": "Nova Ventures",
     "time": "5 hours ago", "status": "rejected"},
    {"id": 4, "type": "social", "title": "LinkedIn Campaign Live", "client": "Atlas Media Group",
     "time": "1 day ago", "status": "approved"},
    {"id": 5, "type": "email", "title": "Promo Email Sent", "client": "TechCorp Industries",
     "time": "1 day ago", "status": "approved"},
]

DEFAULT_APPROVALS = [
    {"id": 1, "title": "January Newsletter Draft", "type": "email", "client": "TechCorp Industries",
     "status": "pending", "submitted_by": "Sarah Anderson", "submitted_at": "2 hours ago", "due_date": "Jan 5, 2026",
     "description": "Monthly newsletter featuring product updates and industry news."},
    {"id": 2, "title": "LinkedIn Campaign Posts (Week 2)", "type": "social", "client": "Green Solutions Ltd",
     "status": "pending", "submitted_by": "Mike Chen", "submitted_at": "5 hours ago", "due_date": "Jan 4, 2026",
     "description": "5 LinkedIn posts focusing on sustainability initiatives."},
    {"id": 3, "title": "Blog: Future of Fintech", "type": "blog", "client": "Nova Ventures",
     "status": "revision", "submitted_by": "Lisa Turner", "submitted_at": "1 day ago", "due_date": "Jan 8, 2026",
     "description": "Thought leadership article on emerging fintech trends.",
     "feedback": "Please add more data points and update the conclusion section."},
    {"id": 4, "title": "Instagram Story Templates", "type": "social", "client": "Atlas Media Group",
     "status": "approved", "submitted_by": "Rachel Brooks", "submitted_at": "2 days ago", "due_date": "Jan 3, 2026",
     "description": "10 story templates for Q1 promotional content.", "approved_at": "1 day ago"},
    {"id": 5, "title": "Product Launch Email Sequence", "type": "email", "client": "TechCorp Industries",
     "status": "rejected", "submitted_by": "John Davis", "submitted_at": "3 days ago", "due_date": "Jan 2, 2026",
     "description": "4-part email sequence for new product launch.",
     "feedback": "Tone doesn't match brand guidelines. Please revise with softer CTA."},
]

# Initials used on project teams
TEAM_DIRECTORY = {
    "JD": "John Doe",
    "AS": "Alice Smith",
    "MK": "Mike Kim",
    "LT": "Lisa Turner",
    "RB": "Rachel Brooks",
}
TEAM_CAPACITY = 5

for _record in INVOICES + DEFAULT_APPROVALS:
    _record["client_id"] = client_id_for(_record["client"])
for _record in DEFAULT_PROJECTS:
    _record["client_id"] = client_id_for(_record["client"])
del _record
