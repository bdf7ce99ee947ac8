"""Built-in sample document: a resume template showing every extension."""

SAMPLE_MARKDOWN = """# ->Your Name<-

->**Your Title / Role**<-

->Location | Phone | Email | LinkedIn<-

->*Skills | Technologies | Areas of Expertise*<-

---

## Professional Experience

### Job Title / Role
**Company Name** | Location | Start Date - End Date

- Describe your key responsibilities and achievements
- Use bullet points for easy reading
- {#0d9488}Highlight metrics and impact where possible

---

## {#2563eb}Key Projects

### ->Project Name<- *(Company, Year)*
Brief description of the project, technologies used, and impact delivered.

---

## Education & Certifications

### ->{#9333ea}Degree Name<-
*Institution Name* - Graduation Year

### Certifications
- Certification Name (Issuing Organization, Year)
"""
