"""Sample agreement pair for the comparison workspace."""

SAMPLE_ORIGINAL = """MASTER SERVICES AGREEMENT

This Master Services Agreement ("Agreement") is entered into as of January 1, 2023 ("Effective Date") by and between TechSolutions Inc., a Delaware corporation ("Provider"), and Global Corp LLC, a California limited liability company ("Client").

1. DEFINITIONS
"Confidential Information" means any non-public information disclosed by one party to the other party, either directly or indirectly, in writing, orally or by inspection of tangible objects, that is designated as "Confidential," "Proprietary" or some similar designation.
"Services" means the professional services, deliverables, and other work product described in one or more Statements of Work (SOW) executed by the parties.
"Deliverables" means all documents, work product, code, and other materials that are delivered to Client under this Agreement or any SOW.

2. SCOPE OF SERVICES
Provider agrees to perform the Services described in the applicable Statement of Work (SOW). Each SOW shall be subject to the terms and conditions of this Agreement. In the event of a conflict between the terms of this Agreement and a SOW, the terms of the SOW shall govern solely with respect to that specific project.

3. TERM AND TERMINATION
3.1 Term. This Agreement shall commence on the Effective Date and shall continue for a period of one (1) year, unless earlier terminated in accordance with this Section 3.
3.2 Termination for Convenience. Client may terminate this Agreement or any SOW for any reason upon thirty (30) days prior written notice to Provider.
3.3 Termination for Cause. Either party may terminate this Agreement immediately upon written notice if the other party materially breaches this Agreement and fails to cure such breach within thirty (30) days after receiving written notice of such breach.

4. PAYMENT TERMS
4.1 Fees. Client shall pay Provider the fees set forth in the applicable SOW.
4.2 Expenses. Client shall reimburse Provider for all reasonable pre-approved travel and out-of-pocket expenses incurred in connection with the Services.
4.3 Invoicing. Provider shall invoice Client on a monthly basis. Payment is due Net 30 days from the invoice date. Late payments shall bear interest at the rate of 1.5% per month or the maximum rate permitted by law, whichever is less.

5. INTELLECTUAL PROPERTY RIGHTS
5.1 Provider IP. Provider retains all right, title, and interest in and to its pre-existing intellectual property, tools, methodologies, and know-how.
5.2 Client IP. Client owns all right, title, and interest in and to the Deliverables upon full payment of all fees due under the applicable SOW.

6. CONFIDENTIALITY
Each party agrees to hold the other party's Confidential Information in strict confidence and not to disclose such information to any third party without the prior written consent of the disclosing party. The receiving party shall use the Confidential Information solely for the purpose of performing its obligations under this Agreement. This obligation shall survive for a period of three (3) years following the termination of this Agreement.

7. WARRANTIES
Provider represents and warrants that: (a) it has the right to enter into this Agreement; (b) the Services will be performed in a professional and workmanlike manner in accordance with industry standards; and (c) the Services and Deliverables will not infringe upon the intellectual property rights of any third party.
EXCEPT AS EXPRESSLY SET FORTH IN THIS SECTION, PROVIDER MAKES NO OTHER WARRANTIES, EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO WARRANTIES OF MERCHANTABILITY OR FITNESS FOR A PARTICULAR PURPOSE.

8. LIMITATION OF LIABILITY
IN NO EVENT SHALL EITHER PARTY BE LIABLE FOR ANY INDIRECT, INCIDENTAL, SPECIAL, CONSEQUENTIAL OR PUNITIVE DAMAGES, INCLUDING WITHOUT LIMITATION DAMAGES FOR LOST PROFITS OR DATA, ARISING OUT OF OR IN CONNECTION WITH THIS AGREEMENT, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGES.
THE TOTAL AGGREGATE LIABILITY OF EITHER PARTY ARISING OUT OF OR RELATED TO THIS AGREEMENT SHALL NOT EXCEED THE TOTAL AMOUNT PAID BY CLIENT TO PROVIDER UNDER THIS AGREEMENT DURING THE TWELVE (12) MONTHS PRECEDING THE CLAIM.

9. INDEMNIFICATION
Provider agrees to indemnify, defend, and hold Client harmless from and against any and all claims, damages, liabilities, costs, and expenses (including reasonable attorneys' fees) arising out of or related to any claim that the Services or Deliverables infringe any third-party intellectual property right.

10. INSURANCE
Provider shall maintain, at its own expense, commercial general liability insurance with limits of not less than $1,000,000 per occurrence and $2,000,000 in the aggregate, and professional liability insurance with limits of not less than $1,000,000 per claim.

11. INDEPENDENT CONTRACTOR
Provider is an independent contractor, and nothing in this Agreement shall be construed to create a partnership, joint venture, or agency relationship between the parties. Provider shall be solely responsible for the payment of all taxes, withholdings, and benefits for its employees.

12. GOVERNING LAW AND VENUE
This Agreement shall be governed by and construed in accordance with the laws of the State of California, without regard to its conflict of laws principles. Any legal action or proceeding arising under this Agreement shall be brought exclusively in the federal or state courts located in San Francisco, California.

13. DISPUTE RESOLUTION
The parties agree to attempt to resolve any dispute arising out of or relating to this Agreement through good faith negotiations. If the dispute cannot be resolved within thirty (30) days, either party may initiate binding arbitration in accordance with the rules of the American Arbitration Association.

14. FORCE MAJEURE
Neither party shall be liable for any failure or delay in performance under this Agreement (other than for delay in the payment of money due and payable hereunder) to the extent said failures or delays are proximately caused by causes beyond that party's reasonable control and occurring without its fault or negligence.

15. GENERAL PROVISIONS
15.1 Assignment. Neither party may assign this Agreement without the prior written consent of the other party, except that either party may assign this Agreement to a successor in connection with a merger, acquisition, or sale of all or substantially all of its assets.
15.2 Entire Agreement. This Agreement constitutes the entire agreement between the parties with respect to the subject matter hereof and supersedes all prior agreements, understandings, and negotiations, both written and oral.
15.3 Amendments. No modification or amendment to this Agreement shall be effective unless in writing and signed by authorized representatives of both parties.
15.4 Severability. If any provision of this Agreement is held to be invalid or unenforceable, the remaining provisions shall continue in full force and effect.
15.5 Waiver. No waiver of any term or condition of this Agreement shall be valid or binding on either party unless the same shall have been set forth in a written document, specifically referring to this Agreement and duly signed by the waiving party."""

SAMPLE_MODIFIED = """AMENDED AND RESTATED MASTER SERVICES AGREEMENT

This Amended and Restated Master Services Agreement ("Agreement") is entered into as of February 15, 2024 ("Effective Date") by and between TechSolutions Inc., a Delaware corporation ("Provider"), and Global Corp LLC, a Delaware limited liability company ("Client").

1. DEFINITIONS
"Confidential Information" means any non-public information disclosed by one party to the other party, either directly or indirectly, in writing, orally or by inspection of tangible objects, that is designated as "Confidential," "Proprietary" or some similar designation.
"Services" means the professional services, deliverables, and other work product described in one or more Statements of Work (SOW) executed by the parties.
"Deliverables" means all documents, work product, source code, object code, and other materials that are delivered to Client under this Agreement or any SOW.
"Data" means all electronic data or information submitted by Client to the Services.

2. SCOPE OF SERVICES
Provider agrees to perform the Services described in the applicable Statement of Work (SOW). Each SOW shall be subject to the terms and conditions of this Agreement. In the event of a conflict between the terms of this Agreement and a SOW, the terms of this Agreement shall control unless the SOW expressly states that it modifies a specific provision of this Agreement.

3. TERM AND TERMINATION
3.1 Term. This Agreement shall commence on the Effective Date and shall continue for a period of two (2) years, unless earlier terminated in accordance with this Section 3.
3.2 Termination for Convenience. Client may terminate this Agreement or any SOW for any reason upon sixty (60) days prior written notice to Provider.
3.3 Termination for Cause. Either party may terminate this Agreement immediately upon written notice if the other party materially breaches this Agreement and fails to cure such breach within fifteen (15) days after receiving written notice of such breach.

4. PAYMENT TERMS
4.1 Fees. Client shall pay Provider the fees set forth in the applicable SOW.
4.2 Expenses. Client shall reimburse Provider for all reasonable and necessary pre-approved travel and out-of-pocket expenses incurred in connection with the Services, provided such expenses are supported by receipts.
4.3 Invoicing. Provider shall invoice Client on a monthly basis. Payment is due Net 45 days from the receipt of invoice. Late payments shall bear interest at the rate of 1.0% per month or the maximum rate permitted by law, whichever is less.

5. INTELLECTUAL PROPERTY RIGHTS
5.1 Provider IP. Provider retains all right, title, and interest in and to its pre-existing intellectual property, tools, methodologies, and know-how.
5.2 Client IP. Client owns all right, title, and interest in and to the Deliverables upon creation, subject to full payment of all fees due under the applicable SOW. Provider hereby assigns all right, title and interest in the Deliverables to Client.

6. CONFIDENTIALITY
Each party agrees to hold the other party's Confidential Information in strict confidence and not to disclose such information to any third party without the prior written consent of the disclosing party. The receiving party shall use the Confidential Information solely for the purpose of performing its obligations under this Agreement. This obligation shall survive for a period of five (5) years following the termination of this Agreement.

7. WARRANTIES
Provider represents and warrants that: (a) it has the right to enter into this Agreement; (b) the Services will be performed in a professional and workmanlike manner in accordance with the highest industry standards; (c) the Services and Deliverables will not infringe upon the intellectual property rights of any third party; and (d) the Deliverables will be free from material defects for a period of ninety (90) days from delivery.
EXCEPT AS EXPRESSLY SET FORTH IN THIS SECTION, PROVIDER MAKES NO OTHER WARRANTIES, EXPRESS OR IMPLIED.

8. LIMITATION OF LIABILITY
IN NO EVENT SHALL EITHER PARTY BE LIABLE FOR ANY INDIRECT, INCIDENTAL, SPECIAL, CONSEQUENTIAL OR PUNITIVE DAMAGES, INCLUDING WITHOUT LIMITATION DAMAGES FOR LOST PROFITS OR DATA, ARISING OUT OF OR IN CONNECTION WITH THIS AGREEMENT, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGES.
THE TOTAL AGGREGATE LIABILITY OF EITHER PARTY ARISING OUT OF OR RELATED TO THIS AGREEMENT SHALL NOT EXCEED TWO TIMES (2X) THE TOTAL AMOUNT PAID BY CLIENT TO PROVIDER UNDER THIS AGREEMENT DURING THE TWELVE (12) MONTHS PRECEDING THE CLAIM.
The foregoing limitations shall not apply to claims related to indemnification, gross negligence, or willful misconduct.

9. INDEMNIFICATION
Provider agrees to indemnify, defend, and hold Client harmless from and against any and all claims, damages, liabilities, costs, and expenses (including reasonable attorneys' fees) arising out of or related to: (i) any claim that the Services or Deliverables infringe any third-party intellectual property right; or (ii) Provider's gross negligence or willful misconduct.

10. INSURANCE
Provider shall maintain, at its own expense, commercial general liability insurance with limits of not less than $2,000,000 per occurrence and $4,000,000 in the aggregate, and professional liability insurance with limits of not less than $2,000,000 per claim. Cyber liability insurance shall also be maintained with limits of $5,000,000.

11. INDEPENDENT CONTRACTOR
Provider is an independent contractor, and nothing in this Agreement shall be construed to create a partnership, joint venture, or agency relationship between the parties. Provider shall be solely responsible for the payment of all taxes, withholdings, and benefits for its employees.

12. GOVERNING LAW AND VENUE
This Agreement shall be governed by and construed in accordance with the laws of the State of Delaware, without regard to its conflict of laws principles. Any legal action or proceeding arising under this Agreement shall be brought exclusively in the federal or state courts located in Wilmington, Delaware.

13. DISPUTE RESOLUTION
The parties agree to attempt to resolve any dispute arising out of or relating to this Agreement through good faith negotiations between senior executives. If the dispute cannot be resolved within thirty (30) days, either party may initiate binding arbitration in accordance with the rules of JAMS.

14. FORCE MAJEURE
Neither party shall be liable for any failure or delay in performance under this Agreement (other than for delay in the payment of money due and payable hereunder) to the extent said failures or delays are proximately caused by causes beyond that party's reasonable control and occurring without its fault or negligence.

15. GENERAL PROVISIONS
15.1 Assignment. Neither party may assign this Agreement without the prior written consent of the other party, except that either party may assign this Agreement to a successor in connection with a merger, acquisition, or sale of all or substantially all of its assets.
15.2 Entire Agreement. This Agreement constitutes the entire agreement between the parties with respect to the subject matter hereof and supersedes all prior agreements, understandings, and negotiations, both written and oral.
15.3 Amendments. No modification or amendment to this Agreement shall be effective unless in writing and signed by authorized representatives of both parties.
15.4 Severability. If any provision of this Agreement is held to be invalid or unenforceable, the remaining provisions shall continue in full force and effect.
15.5 Waiver. No waiver of any term or condition of this Agreement shall be valid or binding on either party unless the same shall have been set forth in a written document, specifically referring to this Agreement and duly signed by the waiving party.
15.6 Counterparts. This Agreement may be executed in counterparts, each of which shall be deemed an original, but all of which together shall constitute one and the same instrument."""
