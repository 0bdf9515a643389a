"""Sample bureau report texts shared by the parser tests."""

EXPERIAN_REPORT = """EXPERIAN CREDIT REPORT
Report Date: 03/01/2024

PERSONAL INFORMATION
Name: JOHN A SMITH JR
SSN: ***-**-1234
Date of Birth: 01/15/1980
Address: 123 MAIN ST, SPRINGFIELD, IL 62701
Previous Address: 45 OAK AVE, CHICAGO, IL 60601
Phone: (555) 123-4567
Employer: ACME CORP

ACCOUNT INFORMATION

Creditor: ABC BANK
Account Number: ****1234
Account Type: Credit Card
Account Status: Open
Balance: $5,000
Credit Limit: $10,000
Date Opened: 01/15/2018
Payment History: OK OK 30 OK

Creditor: LVNV FUNDING
Account Number: ****9876
Account Status: Collection
Balance: $1,200
Past Due: $1,200
Date Opened: 06/01/2020

CREDIT INQUIRIES
CHASE BANK 02/10/2024
CREDIT KARMA 01/05/2024

CREDIT SCORE
FICO Score 8: 720
Score Factors:
Too many inquiries
Age of oldest account

COLLECTIONS
MIDLAND FUNDING LLC
Original Creditor: CAPITAL ONE
Amount: $850
Date Assigned: 04/01/2021
Status: Unpaid
"""

# Same report without the collections listing.
EXPERIAN_REPORT_NO_COLLECTIONS = EXPERIAN_REPORT.split("COLLECTIONS\n")[0]

PERSONAL_BLOCK = """Name: JOHN SMITH
Date of Birth: 01/15/1980
"""

ACCOUNT_BLOCK = """ABC BANK
Balance: $5,000
Credit Limit: $10,000
Status: Open
"""

COLLECTION_ACCOUNT_BLOCK = """XYZ RECOVERY
Balance: $400
Status: Collection
"""

SCORES_TEXT = """FICO Score: 720
VantageScore 3.0: 680
Credit Score: 999
"""

INQUIRIES_TEXT = """CHASE BANK 02/10/2024
CREDIT KARMA 01/05/2024
"""

RECOVERABLE_TEXT = "acct 55512 ssn 123-45-6789 ~~ ##"

GARBAGE_TEXT = "%%% ~~~ ###"

PUBLIC_RECORDS_BLOCK = """PUBLIC RECORDS
Bankruptcy Chapter 7 filed in US Bankruptcy Court for the Northern District of Illinois
Case reference 15-12345 discharged with liabilities of $45,000 and assets of $2,000
Reported by the court clerk and verified through the public docket for this consumer

"""

# Public records listed ahead of a collections listing.
EXPERIAN_REPORT_WITH_PUBLIC_RECORDS = EXPERIAN_REPORT.replace(
    "COLLECTIONS\n", PUBLIC_RECORDS_BLOCK + "COLLECTIONS\n"
)
